"""Settings loaded from sysdesc.yaml and environment variables.

Environment variables:
- SYSDESC_CONFIG: Explicit settings file
- SYSDESC_STORE_DIR: Description store directory
- SYSDESC_EXPORT_EXCLUDES: Comma-separated exclusion patterns for exports
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigError
from ..store import DEFAULT_STORE_DIR

logger = logging.getLogger(__name__)

# Paths never copied into an export bundle nor unpacked on the target
DEFAULT_EXPORT_EXCLUDES = [
    "/etc/passwd",
    "/etc/shadow",
    "/etc/group",
    "/etc/gshadow",
    "/etc/fstab",
    "/etc/machine-id",
    "/boot/*",
    "/dev/*",
    "/proc/*",
    "/sys/*",
    "/tmp/*",
    "/var/tmp/*",
    "/var/lib/rpm/*",
]

DEFAULT_PROFILE_NAME = "autoinst.xml"
DEFAULT_EXCLUDES_FILE = "unmanaged_files_build_excludes"


@dataclass
class ExportSettings:
    """Settings for export bundles."""
    excludes: list[str] = field(default_factory=lambda: DEFAULT_EXPORT_EXCLUDES.copy())
    profile_name: str = DEFAULT_PROFILE_NAME
    excludes_file: str = DEFAULT_EXCLUDES_FILE


@dataclass
class Settings:
    """Application settings."""
    store_dir: Path = DEFAULT_STORE_DIR
    export: ExportSettings = field(default_factory=ExportSettings)
    show_all: bool = False
    source: Optional[Path] = None

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Settings":
        """
        Load settings from YAML, then apply environment overrides.

        Args:
            path: Settings file (default: SYSDESC_CONFIG or the search paths)

        Returns:
            Settings; defaults if no settings file exists

        Raises:
            ConfigError: If the settings file is invalid
        """
        config_path = path or os.environ.get("SYSDESC_CONFIG") or cls._find_config()

        if config_path is None:
            settings = cls()
        else:
            settings = cls.from_file(Path(config_path))

        settings._apply_env()
        return settings

    @staticmethod
    def _find_config() -> Optional[str]:
        """Find the sysdesc.yaml settings file."""
        search_paths = [
            Path.cwd() / "sysdesc.yaml",
            Path.cwd() / "configs" / "sysdesc.yaml",
            Path.home() / ".config" / "sysdesc" / "sysdesc.yaml",
            Path("/etc/sysdesc/sysdesc.yaml"),
        ]

        for search_path in search_paths:
            if search_path.exists():
                return str(search_path)

        return None

    @classmethod
    def from_file(cls, config_path: Path) -> "Settings":
        """Load settings from a YAML file."""
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigError(f"Settings file not found: {config_path}") from None
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        settings = cls.from_dict(data)
        settings.source = config_path
        logger.debug(f"Loaded settings from {config_path}")
        return settings

    @classmethod
    def from_dict(cls, data: Any) -> "Settings":
        """Build settings from a parsed settings document."""
        if not isinstance(data, dict):
            raise ConfigError("Settings must be a mapping")

        settings = cls()

        store_dir = data.get("store_dir")
        if store_dir is not None:
            if not isinstance(store_dir, str):
                raise ConfigError("store_dir must be a string")
            settings.store_dir = Path(store_dir).expanduser()

        export = data.get("export", {}) or {}
        if not isinstance(export, dict):
            raise ConfigError("export must be a mapping")

        excludes = export.get("excludes")
        if excludes is not None:
            if not isinstance(excludes, list) or not all(isinstance(e, str) for e in excludes):
                raise ConfigError("export.excludes must be a list of paths")
            settings.export.excludes = list(excludes)

        for key in ("profile_name", "excludes_file"):
            value = export.get(key)
            if value is None:
                continue
            if not isinstance(value, str) or not value or "/" in value:
                raise ConfigError(f"export.{key} must be a plain file name")
            setattr(settings.export, key, value)

        compare = data.get("compare", {}) or {}
        if not isinstance(compare, dict):
            raise ConfigError("compare must be a mapping")
        settings.show_all = bool(compare.get("show_all", False))

        return settings

    def _apply_env(self) -> None:
        store_dir = os.environ.get("SYSDESC_STORE_DIR")
        if store_dir:
            self.store_dir = Path(store_dir).expanduser()

        excludes = os.environ.get("SYSDESC_EXPORT_EXCLUDES")
        if excludes:
            self.export.excludes = [e.strip() for e in excludes.split(",") if e.strip()]
