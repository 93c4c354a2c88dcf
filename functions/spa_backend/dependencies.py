"""
Dependency wiring shared by the Firebase functions and the FastAPI app.
"""

from __future__ import annotations

from spa_backend.activity import (
    ActivityStore,
    FirestoreActivityStore,
    InMemoryActivityStore,
)
from spa_backend.config import get_settings
from spa_backend.identity import (
    FirebaseIdentityProvider,
    IdentityProvider,
    StaticIdentityProvider,
)
from spa_backend.media import CloudinaryMediaStore, InMemoryMediaStore, MediaStore
from spa_backend.toggle import AppointmentToggle

_media_store: MediaStore | None = None
_activity_store: ActivityStore | None = None
_identity_provider: IdentityProvider | None = None
_appointment_toggle: AppointmentToggle | None = None


def get_media_store() -> MediaStore:
    global _media_store
    if _media_store:
        return _media_store

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.has_cloudinary_credentials:
        _media_store = InMemoryMediaStore()
    else:
        _media_store = CloudinaryMediaStore(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return _media_store


def get_activity_store() -> ActivityStore:
    global _activity_store
    if _activity_store:
        return _activity_store

    if get_settings().use_in_memory_backends:
        _activity_store = InMemoryActivityStore()
    else:
        _activity_store = FirestoreActivityStore()
    return _activity_store


def get_identity_provider() -> IdentityProvider:
    global _identity_provider
    if _identity_provider:
        return _identity_provider

    settings = get_settings()
    if settings.use_in_memory_backends:
        _identity_provider = StaticIdentityProvider(settings.dev_admin_uid)
    else:
        _identity_provider = FirebaseIdentityProvider()
    return _identity_provider


def get_appointment_toggle() -> AppointmentToggle:
    """
    Return the process-wide appointments flag. Each function instance owns
    its own copy, so instances may disagree.
    """
    global _appointment_toggle
    if _appointment_toggle is None:
        _appointment_toggle = AppointmentToggle()
    return _appointment_toggle
