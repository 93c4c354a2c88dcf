"""
Framework-neutral request handlers.

Each handler performs at most one call against an upstream service and
maps the outcome onto a HandlerResult. Upstream exceptions are logged here
and never propagate; the HTTP layers (main.py for Firebase, routes.py for
FastAPI) only translate a HandlerResult into their response type.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional, Type, TypeVar

from dacite import Config, from_dict

from spa_backend.activity import ActivityStore, list_recent_activities
from spa_backend.media import MediaStore
from spa_backend.toggle import AppointmentToggle
from spa_shared.constants import (
    ADMIN_PROFILE_NAME,
    ADMIN_PROFILE_PERMISSIONS,
    ADMIN_PROFILE_ROLE,
    APPOINTMENT_ALLOWED_METHODS,
    FOLDER_PLACEHOLDER_IMAGE,
    FOLDER_PLACEHOLDER_PUBLIC_ID,
    STAFFS_FOLDER,
    STAFFS_LIST_MAX_RESULTS,
    STAFFS_PREFIX,
)
from spa_shared.json_utils import convert_keys
from spa_shared.types import (
    AdminProfile,
    CreateFolderRequest,
    CreateFolderResult,
    DeleteAssetRequest,
    MoveAssetRequest,
    UploadedAsset,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class HandlerResult:
    """
    Status, body and extra headers of a handler response.

    A dict or list body is sent as JSON, a str body as plain text and a
    None body as an empty response.
    """

    status: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


def _error(status: int, message: str) -> HandlerResult:
    return HandlerResult(status, {"error": message})


def _method_not_allowed() -> HandlerResult:
    return HandlerResult(405)


def _parse_request(data_class: Type[T], payload: Any) -> T:
    """Builds a request dataclass from a camelCase JSON object."""
    if not isinstance(payload, dict):
        payload = {}
    return from_dict(
        data_class=data_class,
        data=convert_keys(payload, "camel_to_snake"),
        config=Config(check_types=False),
    )


def _decode_raw_body(raw_body: bytes) -> Any:
    try:
        return raw_body.decode("utf-8").strip()
    except UnicodeDecodeError:
        return raw_body


def _ensure_folder(media: MediaStore, path: str) -> None:
    # Folder creation is advisory; the host creates folders on upload anyway.
    try:
        media.create_folder(path)
    except Exception as e:
        logger.info("Could not create media folder %s: %s", path, e)


def admin_profile(caller_id: Optional[str]) -> HandlerResult:
    """Returns the placeholder admin profile for any authenticated caller."""
    if not caller_id:
        return _error(401, "Unauthorized")

    profile = AdminProfile(
        id=caller_id,
        name=ADMIN_PROFILE_NAME,
        role=ADMIN_PROFILE_ROLE,
        permissions=list(ADMIN_PROFILE_PERMISSIONS),
    )
    return HandlerResult(200, asdict(profile))


def appointment(method: str, toggle: AppointmentToggle) -> HandlerResult:
    """GET reads the appointments flag, POST flips it."""
    if method == "GET":
        return HandlerResult(200, {"enabled": toggle.enabled})
    if method == "POST":
        return HandlerResult(200, {"enabled": toggle.toggle()})
    return HandlerResult(
        405,
        f"Method {method} Not Allowed",
        headers={"Allow": ", ".join(APPOINTMENT_ALLOWED_METHODS)},
    )


def staffs_list(method: str, media: MediaStore) -> HandlerResult:
    if method != "GET":
        return _method_not_allowed()
    try:
        resources = media.list_resources(STAFFS_PREFIX, STAFFS_LIST_MAX_RESULTS)
    except Exception:
        logger.exception("Listing staff photos failed")
        return _error(500, "List failed")
    return HandlerResult(200, resources)


def staffs_upload(
    method: str, payload: Any, raw_body: bytes, media: MediaStore
) -> HandlerResult:
    """
    Uploads a staff photo into the staffs folder.

    The file is taken from the JSON body's `file` field (data URI, remote URL
    or other host file reference), from the body itself when it is a JSON
    string, and otherwise from the raw request body.
    """
    if method != "POST":
        return _method_not_allowed()

    if isinstance(payload, str):
        file = payload
    elif isinstance(payload, dict) and payload.get("file") is not None:
        file = payload["file"]
    else:
        file = _decode_raw_body(raw_body)

    try:
        result = media.upload(file, folder=STAFFS_FOLDER)
    except Exception:
        logger.exception("Uploading staff photo failed")
        return _error(500, "Upload failed")

    uploaded = UploadedAsset(url=result["secure_url"], public_id=result["public_id"])
    return HandlerResult(200, convert_keys(asdict(uploaded), "snake_to_camel"))


def staffs_delete(method: str, payload: Any, media: MediaStore) -> HandlerResult:
    if method != "DELETE":
        return _method_not_allowed()

    request = _parse_request(DeleteAssetRequest, payload)
    if not request.public_id:
        return _error(400, "publicId required")

    try:
        media.destroy(request.public_id)
    except Exception:
        logger.exception("Deleting staff photo %s failed", request.public_id)
        return _error(500, "Delete failed")
    return HandlerResult(200, {"deleted": True})


def staffs_create_folder(
    method: str, payload: Any, media: MediaStore
) -> HandlerResult:
    """
    Creates `staffs/<folderName>` by seeding it with a placeholder image,
    unless the folder already holds assets.
    """
    if method != "POST":
        return HandlerResult(405, {"message": "Method not allowed"})

    request = _parse_request(CreateFolderRequest, payload)
    if not request.folder_name:
        return HandlerResult(400, {"message": "folderName is required"})

    _ensure_folder(media, STAFFS_FOLDER)
    full_path = f"{STAFFS_FOLDER}/{request.folder_name}"
    try:
        if media.folder_has_assets(full_path):
            result = CreateFolderResult(path=full_path, created=False)
            return HandlerResult(200, asdict(result))

        media.upload(
            FOLDER_PLACEHOLDER_IMAGE,
            folder=full_path,
            public_id=FOLDER_PLACEHOLDER_PUBLIC_ID,
        )
    except Exception:
        logger.exception("Creating staff folder %s failed", full_path)
        return _error(500, "Failed to create folder")

    result = CreateFolderResult(path=full_path, created=True)
    return HandlerResult(201, asdict(result))


def staffs_move(method: str, payload: Any, media: MediaStore) -> HandlerResult:
    """Moves an asset into `toFolder`, keeping its file name."""
    if method != "POST":
        return _method_not_allowed()

    request = _parse_request(MoveAssetRequest, payload)
    if not request.public_id:
        return _error(400, "publicId required")

    _ensure_folder(media, STAFFS_FOLDER)
    _ensure_folder(media, request.to_folder)
    file_name = str(request.public_id).split("/")[-1]
    new_id = f"{request.to_folder}/{file_name}"
    try:
        media.rename(request.public_id, new_id)
    except Exception:
        logger.exception("Moving %s to %s failed", request.public_id, new_id)
        return _error(500, "Move failed")
    return HandlerResult(200, {"publicId": new_id})


def dashboard_activity(
    method: str,
    caller_id: Optional[str],
    store: ActivityStore,
    now: Optional[datetime] = None,
) -> HandlerResult:
    """Returns the recent activity feed for the admin dashboard."""
    if not caller_id:
        return _error(401, "Unauthorized")
    if method != "GET":
        return _error(405, "Method not allowed")

    try:
        entries = list_recent_activities(store, now=now)
    except Exception:
        logger.exception("Fetching activity data failed")
        return _error(500, "Failed to fetch activity data")
    return HandlerResult(200, {"activities": [asdict(entry) for entry in entries]})
