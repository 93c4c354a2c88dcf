"""
Activity log: best-effort writes of business events to Firestore and the
recent-activity feed read by the admin dashboard.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Protocol

from firebase_admin import firestore
from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from google.cloud.firestore_v1.base_query import FieldFilter

from spa_backend.firebase import get_firestore_client
from spa_shared.constants import (
    ACTIVITIES_COLLECTION,
    RECENT_ACTIVITY_LIMIT,
    RECENT_ACTIVITY_WINDOW_HOURS,
)
from spa_shared.types import (
    ActivityEntry,
    ActivityRecord,
    ActivityStatus,
    ActivityType,
)

logger = logging.getLogger(__name__)


class ActivityStore(Protocol):
    """Operations the activity log needs from the document store."""

    def add(self, document: dict) -> str:
        ...

    def list_since(self, since: datetime, limit: int) -> list[tuple[str, dict]]:
        ...


class FirestoreActivityStore:
    """Stores activities as documents in the `activities` collection."""

    def __init__(self, client=None):
        self._client = client

    @property
    def db(self):
        if self._client is None:
            self._client = get_firestore_client()
        return self._client

    def add(self, document: dict) -> str:
        _, doc_ref = self.db.collection(ACTIVITIES_COLLECTION).add(document)
        return doc_ref.id

    def list_since(self, since: datetime, limit: int) -> list[tuple[str, dict]]:
        query = (
            self.db.collection(ACTIVITIES_COLLECTION)
            .where(filter=FieldFilter("timestamp", ">=", since))
            .order_by("timestamp", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        return [(snapshot.id, snapshot.to_dict()) for snapshot in query.stream()]


class InMemoryActivityStore:
    """Simple in-memory activity store for development and tests."""

    def __init__(self):
        self.documents: dict[str, dict] = {}

    def reset(self) -> None:
        self.documents.clear()

    def add(self, document: dict) -> str:
        stored = dict(document)
        if stored.get("timestamp") is SERVER_TIMESTAMP:
            stored["timestamp"] = datetime.now(timezone.utc)
        doc_id = uuid.uuid4().hex
        self.documents[doc_id] = stored
        return doc_id

    def list_since(self, since: datetime, limit: int) -> list[tuple[str, dict]]:
        matching = [
            (doc_id, doc)
            for doc_id, doc in self.documents.items()
            if doc.get("timestamp") is not None and doc["timestamp"] >= since
        ]
        matching.sort(key=lambda item: item[1]["timestamp"], reverse=True)
        return matching[:limit]


def log_activity(
    message: str,
    activity_type: ActivityType | str = ActivityType.APPOINTMENT,
    status: ActivityStatus | str = ActivityStatus.SUCCESS,
    user_id: Optional[str] = None,
    store: Optional[ActivityStore] = None,
) -> bool:
    """
    Records a business event in the activity log.

    Logging must never abort the operation that triggered it, so store
    failures and unknown type or status values are logged and reported as
    False instead of raised.

    Args:
        message: Human readable description of the event.
        activity_type: One of ActivityType (default "appointment").
        status: One of ActivityStatus (default "success").
        user_id: Optional ID of the acting user.
        store: Store to write to; defaults to the process-wide activity store.

    Returns:
        True if the entry was written, False otherwise, including when
        activity_type or status is not a known value.
    """
    try:
        record = ActivityRecord(
            message=message,
            type=ActivityType(activity_type),
            status=ActivityStatus(status),
            timestamp=SERVER_TIMESTAMP,
            user_id=user_id or None,
        )
        if store is None:
            from spa_backend.dependencies import get_activity_store

            store = get_activity_store()
        store.add(record.to_document())
    except Exception:
        logger.exception("Error logging activity")
        return False
    return True


def format_time_ago(then: datetime, now: datetime) -> str:
    """Formats the distance between two instants as e.g. "5 minutes ago"."""
    diff_minutes = math.floor((now - then).total_seconds() / 60 + 0.5)
    if diff_minutes < 1:
        return "just now"
    if diff_minutes < 60:
        return f"{diff_minutes} minute{'s' if diff_minutes > 1 else ''} ago"

    diff_hours = diff_minutes // 60
    if diff_hours < 24:
        return f"{diff_hours} hour{'s' if diff_hours > 1 else ''} ago"

    diff_days = diff_hours // 24
    return f"{diff_days} day{'s' if diff_days > 1 else ''} ago"


def list_recent_activities(
    store: ActivityStore,
    now: Optional[datetime] = None,
    window: timedelta = timedelta(hours=RECENT_ACTIVITY_WINDOW_HOURS),
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> List[ActivityEntry]:
    """Returns the newest activities within `window`, newest first."""
    now = now or datetime.now(timezone.utc)
    entries = []
    for doc_id, data in store.list_since(now - window, limit):
        entries.append(
            ActivityEntry(
                id=doc_id,
                type=data.get("type") or ActivityType.APPOINTMENT.value,
                message=data.get("message", ""),
                time=format_time_ago(data["timestamp"], now),
                status=data.get("status") or ActivityStatus.SUCCESS.value,
            )
        )
    return entries
