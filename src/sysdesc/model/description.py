"""Description - all scopes captured from one system at one point in time."""
import copy
from pathlib import Path
from typing import Any, Iterator, Optional

from ..errors import MalformedDocument, NotFound
from .scope import Scope

# Known scope kinds in display/processing order
SCOPE_ORDER = [
    "repositories",
    "packages",
    "patterns",
    "users",
    "groups",
    "services",
    "config_files",
    "changed_managed_files",
    "unmanaged_files",
]

# Scopes whose elements are files that may have been extracted to disk
FILE_SCOPES = [
    "config_files",
    "changed_managed_files",
    "unmanaged_files",
]

MANIFEST_FILE = "manifest.json"


def sort_kinds(kinds) -> list[str]:
    """Order scope kinds: known kinds first in SCOPE_ORDER, others alphabetically."""
    known = [k for k in SCOPE_ORDER if k in kinds]
    unknown = sorted(k for k in kinds if k not in SCOPE_ORDER)
    return known + unknown


class Description:
    """
    A system description: scopes keyed by kind plus a free-form ``meta`` block.

    Document form:

    ```json
    {
      "meta": {"format_version": 1, "hostname": "web01"},
      "services": {"extracted": false, "elements": [...]},
      "packages": {"elements": [...]}
    }
    ```
    """

    def __init__(
        self,
        name: str,
        scopes: Optional[dict[str, Scope]] = None,
        meta: Optional[dict[str, Any]] = None,
        path: Optional[Path] = None,
    ):
        self.name = name
        self.meta = copy.deepcopy(meta or {})
        self.path = Path(path) if path else None
        self._scopes: dict[str, Scope] = {}

        for kind, scope in (scopes or {}).items():
            if scope.kind != kind:
                raise MalformedDocument(
                    f"Scope stored under '{kind}' is of kind '{scope.kind}'"
                )
            self._scopes[kind] = scope

    @classmethod
    def from_document(
        cls,
        doc: Any,
        name: str,
        path: Optional[Path] = None,
    ) -> "Description":
        """
        Parse a description document.

        Args:
            doc: Parsed manifest (dict)
            name: Description name
            path: Directory the description was loaded from, if any

        Raises:
            MalformedDocument: If the document or one of its scopes is invalid
        """
        if not isinstance(doc, dict):
            raise MalformedDocument(f"Description '{name}' must be a mapping")

        meta = doc.get("meta", {})
        if not isinstance(meta, dict):
            raise MalformedDocument(f"Meta data of description '{name}' must be a mapping")

        scopes = {}
        for kind, scope_doc in doc.items():
            if kind == "meta":
                continue
            scopes[kind] = Scope.from_document(scope_doc, kind=kind)

        return cls(name=name, scopes=scopes, meta=meta, path=path)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the manifest form."""
        doc: dict[str, Any] = {}
        if self.meta:
            doc["meta"] = copy.deepcopy(self.meta)
        for kind, scope in self._scopes.items():
            doc[kind] = scope.to_document()
        return doc

    def __getitem__(self, kind: str) -> Scope:
        try:
            return self._scopes[kind]
        except KeyError:
            raise NotFound(f"Description '{self.name}' has no scope '{kind}'") from None

    def get(self, kind: str) -> Optional[Scope]:
        return self._scopes.get(kind)

    def has_scope(self, kind: str) -> bool:
        return kind in self._scopes

    def __contains__(self, kind: str) -> bool:
        return kind in self._scopes

    def kinds(self) -> list[str]:
        """Scope kinds present, in processing order."""
        return sort_kinds(self._scopes)

    def scopes(self) -> Iterator[Scope]:
        for kind in self.kinds():
            yield self._scopes[kind]

    def extracted_kinds(self) -> list[str]:
        """Kinds whose raw file content was captured."""
        return [k for k in self.kinds() if self._scopes[k].extracted]

    def scope_file_dir(self, kind: str) -> Optional[Path]:
        """Directory holding extracted files of a scope, if the description is on disk."""
        if self.path is None:
            return None
        return self.path / kind

    @property
    def hostname(self) -> str:
        return self.meta.get("hostname", "")

    def __repr__(self) -> str:
        return f"Description({self.name!r}, scopes={self.kinds()})"
