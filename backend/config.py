"""
Barq Preview configuration: all environment variables in one place.

Read from environment at import time. Nothing is required; every value has
a development default.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Request limits for the preview API
    PREVIEW_MAX_FILES: int = int(os.environ.get("PREVIEW_MAX_FILES", "200"))
    PREVIEW_MAX_FILE_BYTES: int = int(os.environ.get("PREVIEW_MAX_FILE_BYTES", str(512 * 1024)))

    # Previews are pure functions of their files, so the digest is a safe ETag
    PREVIEW_CACHE_CONTROL: str = os.environ.get("PREVIEW_CACHE_CONTROL", "private, max-age=0, must-revalidate")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


# Singleton instance
settings = Settings()
