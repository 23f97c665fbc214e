"""Element - a single named configuration record inside a scope."""
import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

# Marker for an attribute that one side of a comparison does not define
ABSENT = object()


def values_equal(a: Any, b: Any) -> bool:
    """
    Structural equality for attribute values.

    Mappings are compared key by key regardless of order, sequences are
    compared position by position, and booleans never equal numbers.

    Args:
        a: First value (may be ABSENT)
        b: Second value (may be ABSENT)

    Returns:
        True if both values are structurally identical
    """
    if a is ABSENT or b is ABSENT:
        return a is b

    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if set(a.keys()) != set(b.keys()):
            return False
        return all(values_equal(a[k], b[k]) for k in a)

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))

    if isinstance(a, (Mapping, list, tuple)) or isinstance(b, (Mapping, list, tuple)):
        return False

    return a == b


@dataclass(frozen=True, eq=False)
class Element:
    """One configuration record (a service, a repository, a user ...).

    ``name`` is the identity key within the owning scope; everything else
    lives in ``attributes``.
    """
    name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Private copy behind a read-only view
        object.__setattr__(
            self, "attributes", MappingProxyType(copy.deepcopy(dict(self.attributes)))
        )

    def __getitem__(self, key: str) -> Any:
        if key == "name":
            return self.name
        return copy.deepcopy(self.attributes[key])

    def get(self, key: str, default: Any = None) -> Any:
        """Get an attribute value, or default if the element lacks it."""
        if key == "name":
            return self.name
        if key not in self.attributes:
            return default
        return copy.deepcopy(self.attributes[key])

    def __contains__(self, key: str) -> bool:
        return key == "name" or key in self.attributes

    def keys(self) -> list[str]:
        """Attribute keys in stored order (name excluded)."""
        return list(self.attributes.keys())

    def raw(self, key: str, default: Any = ABSENT) -> Any:
        """Attribute value without copying, ABSENT when undefined."""
        return self.attributes.get(key, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.name == other.name and values_equal(self.attributes, other.attributes)

    def __hash__(self) -> int:
        return hash(self.name)

    def to_document(self) -> dict[str, Any]:
        """Serialize to a record with ``name`` first."""
        return {"name": self.name, **copy.deepcopy(dict(self.attributes))}

    @classmethod
    def from_document(cls, record: Mapping[str, Any]) -> "Element":
        """Build an element from a record; the caller validates ``name``."""
        attributes = {k: v for k, v in record.items() if k != "name"}
        return cls(name=record["name"], attributes=attributes)
