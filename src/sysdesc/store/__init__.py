"""On-disk description store.

Directory structure managed:
    <store>/
    ├── <name>/
    │   ├── manifest.json     # Serialized description
    │   ├── config_files/     # Extracted files per scope (optional)
    │   └── unmanaged_files/
    └── ...
"""

from .store import DescriptionStore, DEFAULT_STORE_DIR

__all__ = [
    "DescriptionStore",
    "DEFAULT_STORE_DIR",
]
