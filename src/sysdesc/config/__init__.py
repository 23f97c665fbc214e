"""Application settings."""
from .settings import (
    Settings,
    ExportSettings,
    DEFAULT_EXPORT_EXCLUDES,
    DEFAULT_PROFILE_NAME,
    DEFAULT_EXCLUDES_FILE,
)

__all__ = [
    "Settings",
    "ExportSettings",
    "DEFAULT_EXPORT_EXCLUDES",
    "DEFAULT_PROFILE_NAME",
    "DEFAULT_EXCLUDES_FILE",
]
