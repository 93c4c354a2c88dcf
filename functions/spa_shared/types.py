# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, List, Optional

from spa_shared.constants import STAFFS_FOLDER


class ActivityType(StrEnum):
    """Business area an activity entry belongs to."""

    APPOINTMENT = "appointment"
    SERVICE = "service"
    GALLERY = "gallery"
    SETTINGS = "settings"


class ActivityStatus(StrEnum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ActivityRecord:
    """Schema for activity entries stored in Firestore."""

    message: str
    type: ActivityType
    status: ActivityStatus
    timestamp: Any  # Firestore timestamp (firestore_v1.SERVER_TIMESTAMP on write)
    user_id: Optional[str] = None

    def to_document(self) -> dict:
        # Built by hand rather than with asdict() so the SERVER_TIMESTAMP
        # sentinel is passed through by identity.
        return {
            "message": self.message,
            "type": self.type.value,
            "status": self.status.value,
            "timestamp": self.timestamp,
            "userId": self.user_id,
        }


@dataclass
class ActivityEntry:
    """An activity as shown in the admin dashboard feed."""

    id: str
    type: str
    message: str
    time: str
    status: str


@dataclass
class AdminProfile:
    id: str
    name: str
    role: str
    permissions: List[str] = field(default_factory=list)


@dataclass
class UploadedAsset:
    """The subset of a media host upload result returned to the client."""

    url: str
    public_id: str


@dataclass
class DeleteAssetRequest:
    public_id: Optional[str] = None


@dataclass
class MoveAssetRequest:
    public_id: Optional[str] = None
    to_folder: str = STAFFS_FOLDER


@dataclass
class CreateFolderRequest:
    folder_name: Optional[str] = None


@dataclass
class CreateFolderResult:
    path: str
    created: bool
