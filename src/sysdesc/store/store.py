"""Description store for reading and writing system descriptions.

Handles:
- Loading manifest.json documents into Description objects
- Writing descriptions back to disk
- Listing and removing stored descriptions
"""
import json
import logging
import re
import shutil
from pathlib import Path
from typing import Optional

from ..errors import MalformedDocument, NotFound
from ..model import Description, MANIFEST_FILE

logger = logging.getLogger(__name__)

# Default store directory
DEFAULT_STORE_DIR = Path.home() / ".sysdesc" / "descriptions"

VALID_NAME = re.compile(r"^[\w.:-]+$")


class DescriptionStore:
    """
    Manages system descriptions stored as directories.

    Each description lives in ``<base_dir>/<name>/manifest.json``; extracted
    file content of a scope sits next to it in ``<base_dir>/<name>/<kind>/``.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            base_dir: Base directory for descriptions (default: ~/.sysdesc/descriptions)
        """
        self.base_dir = Path(base_dir) if base_dir else DEFAULT_STORE_DIR

    def description_path(self, name: str) -> Path:
        """
        Directory of a named description.

        Raises:
            NotFound: If the name is not a valid description name
        """
        if not VALID_NAME.match(name):
            raise NotFound(f"Invalid description name: {name!r}")
        return self.base_dir / name

    def manifest_path(self, name: str) -> Path:
        return self.description_path(name) / MANIFEST_FILE

    def list(self) -> list[str]:
        """List names of all stored descriptions."""
        if not self.base_dir.exists():
            return []
        return sorted(
            p.name for p in self.base_dir.iterdir()
            if (p / MANIFEST_FILE).is_file()
        )

    def exists(self, name: str) -> bool:
        return self.manifest_path(name).is_file()

    def load(self, name: str) -> Description:
        """
        Load a description by name.

        Raises:
            NotFound: If no such description is stored
            MalformedDocument: If the manifest can't be parsed
        """
        manifest = self.manifest_path(name)
        if not manifest.is_file():
            raise NotFound(f"Description '{name}' not found in {self.base_dir}")

        try:
            doc = json.loads(manifest.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedDocument(f"Manifest of description '{name}' is not valid JSON: {e}") from e

        description = Description.from_document(doc, name=name, path=manifest.parent)
        logger.debug(f"Loaded description '{name}' with scopes {description.kinds()}")
        return description

    def save(self, description: Description) -> Path:
        """
        Write a description's manifest.

        Returns:
            Path of the written manifest
        """
        path = self.description_path(description.name)
        path.mkdir(parents=True, exist_ok=True)

        manifest = path / MANIFEST_FILE
        manifest.write_text(
            json.dumps(description.to_document(), indent=2) + "\n",
            encoding="utf-8",
        )
        description.path = path

        logger.info(f"Saved description '{description.name}' to {path}")
        return manifest

    def remove(self, name: str) -> bool:
        """Delete a stored description including extracted files."""
        path = self.description_path(name)
        if path.exists():
            shutil.rmtree(path)
            logger.info(f"Removed description '{name}'")
            return True
        return False
