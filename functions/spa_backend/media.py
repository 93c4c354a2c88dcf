"""
Media host abstraction for Cloudinary and an in-memory test implementation.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Protocol

import cloudinary
import cloudinary.api
import cloudinary.search
import cloudinary.uploader
import cloudinary.utils


class MediaStore(Protocol):
    """Defines the operations the API needs from the media host."""

    def list_resources(self, prefix: str, max_results: int) -> dict:
        ...

    def upload(self, file: Any, folder: str, public_id: str | None = None) -> dict:
        ...

    def destroy(self, public_id: str) -> dict:
        ...

    def create_folder(self, path: str) -> dict:
        ...

    def folder_has_assets(self, path: str) -> bool:
        ...

    def rename(self, from_public_id: str, to_public_id: str) -> dict:
        ...


@dataclass
class InMemoryMediaStore:
    """Test double for media host interactions."""

    base_url: str = "https://media.example.test/image/upload"
    resources: dict = field(default_factory=dict)
    folders: set = field(default_factory=set)

    def reset(self) -> None:
        self.resources.clear()
        self.folders.clear()

    def _resource(self, public_id: str) -> dict:
        return {
            "public_id": public_id,
            "resource_type": "image",
            "type": "upload",
            "secure_url": f"{self.base_url}/{public_id}",
            "context": {},
        }

    def list_resources(self, prefix: str, max_results: int) -> dict:
        matching = sorted(pid for pid in self.resources if pid.startswith(prefix))
        return {"resources": [self.resources[pid] for pid in matching[:max_results]]}

    def upload(self, file: Any, folder: str, public_id: str | None = None) -> dict:
        if not file:
            raise ValueError("Empty file")
        name = public_id or uuid.uuid4().hex[:20]
        full_id = f"{folder}/{name}"
        self.folders.add(folder)
        self.resources[full_id] = self._resource(full_id)
        return dict(self.resources[full_id])

    def destroy(self, public_id: str) -> dict:
        if self.resources.pop(public_id, None) is None:
            return {"result": "not found"}
        return {"result": "ok"}

    def create_folder(self, path: str) -> dict:
        self.folders.add(path)
        return {"success": True, "path": path, "name": path.rsplit("/", 1)[-1]}

    def folder_has_assets(self, path: str) -> bool:
        return any(pid.startswith(path + "/") for pid in self.resources)

    def rename(self, from_public_id: str, to_public_id: str) -> dict:
        if from_public_id not in self.resources:
            raise KeyError(from_public_id)
        del self.resources[from_public_id]
        self.folders.add(to_public_id.rsplit("/", 1)[0])
        self.resources[to_public_id] = self._resource(to_public_id)
        return dict(self.resources[to_public_id])


@dataclass
class CloudinaryMediaStore:
    """
    Cloudinary-backed media store.
    """

    cloud_name: str
    api_key: str
    api_secret: str

    def __post_init__(self):
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )

    def list_resources(self, prefix: str, max_results: int) -> dict:
        return dict(
            cloudinary.api.resources(
                type="upload",
                prefix=prefix,
                max_results=max_results,
                context=True,
            )
        )

    def upload(self, file: Any, folder: str, public_id: str | None = None) -> dict:
        if isinstance(file, str) and not cloudinary.utils.is_remote_url(file):
            # A plain string would be opened as a local path; send its bytes.
            file = file.encode("utf-8")
        options = {"folder": folder}
        if public_id:
            options["public_id"] = public_id
        return cloudinary.uploader.upload(file, **options)

    def destroy(self, public_id: str) -> dict:
        return cloudinary.uploader.destroy(public_id)

    def create_folder(self, path: str) -> dict:
        return dict(cloudinary.api.create_folder(path))

    def folder_has_assets(self, path: str) -> bool:
        result = (
            cloudinary.search.Search()
            .expression(f"folder={path}")
            .max_results(1)
            .execute()
        )
        return result.get("total_count", 0) > 0

    def rename(self, from_public_id: str, to_public_id: str) -> dict:
        return cloudinary.uploader.rename(
            from_public_id, to_public_id, overwrite=True, invalidate=True
        )
