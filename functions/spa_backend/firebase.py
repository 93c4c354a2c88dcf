"""
Lazy initialization of the Firebase Admin app and its Firestore client.
"""

from __future__ import annotations

import logging

import firebase_admin
from firebase_admin import credentials, firestore

from spa_backend.config import get_settings

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def _service_account_credential():
    settings = get_settings()
    return credentials.Certificate(
        {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "client_email": settings.firebase_client_email,
            "private_key": settings.firebase_private_key,
            "token_uri": GOOGLE_TOKEN_URI,
        }
    )


def get_firebase_app() -> firebase_admin.App:
    """
    Return the default Firebase app, initializing it on first use.

    A service account from the settings is used when configured; otherwise
    the Admin SDK falls back to application default credentials.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    settings = get_settings()
    credential = _service_account_credential() if settings.has_service_account else None
    options = (
        {"projectId": settings.firebase_project_id}
        if settings.firebase_project_id
        else None
    )
    logger.info(
        "Initializing Firebase app (service account: %s)",
        settings.has_service_account,
    )
    return firebase_admin.initialize_app(credential, options)


def get_firestore_client():
    return firestore.client(app=get_firebase_app())
