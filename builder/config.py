"""
Page builder configuration — all environment variables in one place.

Read from environment at import time.
"""

from __future__ import annotations

import os

_VIEWPORTS = ("mobile", "tablet", "desktop")


class Settings:
    """Engine settings from environment variables."""

    # Instance IDs look like <ID_PREFIX>_<epoch-ms>_<random>
    ID_PREFIX: str = os.environ.get("BUILDER_ID_PREFIX", "component")

    # Viewport a fresh store starts in
    DEFAULT_VIEWPORT: str = os.environ.get("BUILDER_DEFAULT_VIEWPORT", "desktop")


# Singleton instance
settings = Settings()

if settings.DEFAULT_VIEWPORT not in _VIEWPORTS:
    raise RuntimeError(f"BUILDER_DEFAULT_VIEWPORT must be one of: {', '.join(_VIEWPORTS)}")
if not settings.ID_PREFIX:
    raise RuntimeError("BUILDER_ID_PREFIX must not be empty")
