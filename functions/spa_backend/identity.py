"""
Caller identity resolution backed by Firebase Authentication.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from firebase_admin import auth, exceptions as firebase_exceptions

from spa_backend.firebase import get_firebase_app

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class IdentityProvider(Protocol):
    """Resolves the authenticated caller of a request, if any."""

    def caller_id(self, authorization: Optional[str]) -> Optional[str]:
        ...


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class FirebaseIdentityProvider:
    """Verifies Firebase ID tokens sent as `Authorization: Bearer <token>`."""

    def caller_id(self, authorization: Optional[str]) -> Optional[str]:
        token = extract_bearer_token(authorization)
        if token is None:
            return None
        try:
            claims = auth.verify_id_token(token, app=get_firebase_app())
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            # Covers invalid, expired and revoked tokens as well as
            # certificate fetch failures.
            logger.warning("Rejected ID token: %s", e)
            return None
        return claims.get("uid")


@dataclass
class StaticIdentityProvider:
    """Test double that treats every request as coming from `uid`."""

    uid: Optional[str] = None

    def caller_id(self, authorization: Optional[str]) -> Optional[str]:
        return self.uid
