"""
Configuration and settings for the spa admin backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings shared by the functions and the FastAPI app."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="SPA_USE_IN_MEMORY_BACKENDS"
    )
    # Caller identity assumed by the in-memory identity provider.
    dev_admin_uid: Optional[str] = Field(
        default=None, validation_alias="SPA_DEV_ADMIN_UID"
    )

    # Cloudinary (staff photos)
    cloudinary_cloud_name: Optional[str] = Field(default=None)
    cloudinary_api_key: Optional[str] = Field(default=None)
    cloudinary_api_secret: Optional[str] = Field(default=None)

    # Firebase service account. When unset, application default credentials
    # are used (the normal case inside Cloud Functions).
    firebase_project_id: Optional[str] = Field(default=None)
    firebase_client_email: Optional[str] = Field(default=None)
    firebase_private_key: Optional[str] = Field(default=None)

    @field_validator("firebase_private_key")
    @classmethod
    def _unescape_private_key(cls, value: Optional[str]) -> Optional[str]:
        # Keys pasted into env vars carry literal "\n" sequences.
        if value is None:
            return value
        return value.replace("\\n", "\n")

    @property
    def has_cloudinary_credentials(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @property
    def has_service_account(self) -> bool:
        return bool(self.firebase_client_email and self.firebase_private_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
