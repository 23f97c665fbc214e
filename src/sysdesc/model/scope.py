"""Scope - an ordered, name-keyed collection of elements of one kind."""
import copy
from typing import Any, Iterator, Optional

from ..errors import MalformedDocument, NotFound
from .element import Element, values_equal


class Scope:
    """
    Homogeneous collection of elements captured for one scope kind.

    Document form:

    ```json
    {
      "kind": "services",
      "extracted": false,
      "attributes": {"init_system": "systemd"},
      "elements": [{"name": "sshd.service", "state": "enabled"}]
    }
    ```

    A bare list of element records is accepted as well.
    """

    def __init__(
        self,
        kind: str,
        elements: Optional[list[Element]] = None,
        extracted: bool = False,
        attributes: Optional[dict[str, Any]] = None,
    ):
        self.kind = kind
        self.extracted = extracted
        self.attributes = copy.deepcopy(attributes or {})
        self._elements: tuple[Element, ...] = tuple(elements or ())
        self._index: dict[str, Element] = {}

        for element in self._elements:
            if element.name in self._index:
                raise MalformedDocument(
                    f"Duplicate element '{element.name}' in scope '{kind}'"
                )
            self._index[element.name] = element

    @classmethod
    def from_document(cls, doc: Any, kind: Optional[str] = None) -> "Scope":
        """
        Parse a scope document.

        Args:
            doc: Scope document dict, or a plain list of element records
            kind: Expected scope kind (taken from the document if omitted)

        Returns:
            Scope object

        Raises:
            MalformedDocument: If the document or any record is invalid
        """
        if isinstance(doc, list):
            doc = {"elements": doc}

        if not isinstance(doc, dict):
            raise MalformedDocument(
                f"Scope document must be a mapping or a list, got {type(doc).__name__}"
            )

        declared_kind = doc.get("kind")
        if kind is not None and declared_kind is not None and declared_kind != kind:
            raise MalformedDocument(
                f"Document declares scope '{declared_kind}', expected '{kind}'"
            )
        scope_kind = kind or declared_kind
        if not scope_kind:
            raise MalformedDocument("Scope document does not declare a kind")

        records = doc.get("elements", [])
        if not isinstance(records, list):
            raise MalformedDocument(f"Elements of scope '{scope_kind}' must be a list")

        extracted = doc.get("extracted", False)
        if not isinstance(extracted, bool):
            raise MalformedDocument(f"Extracted flag of scope '{scope_kind}' must be true or false")

        attributes = doc.get("attributes", {})
        if not isinstance(attributes, dict):
            raise MalformedDocument(f"Attributes of scope '{scope_kind}' must be a mapping")

        elements = []
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                raise MalformedDocument(
                    f"Element #{position} of scope '{scope_kind}' is not a mapping"
                )
            name = record.get("name")
            if not isinstance(name, str) or not name:
                raise MalformedDocument(
                    f"Element #{position} of scope '{scope_kind}' has no name"
                )
            elements.append(Element.from_document(record))

        return cls(
            kind=scope_kind,
            elements=elements,
            extracted=extracted,
            attributes=attributes,
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize back to the document form accepted by from_document."""
        doc: dict[str, Any] = {
            "kind": self.kind,
            "extracted": self.extracted,
        }
        if self.attributes:
            doc["attributes"] = copy.deepcopy(self.attributes)
        doc["elements"] = [e.to_document() for e in self._elements]
        return doc

    def elements(self) -> Iterator[Element]:
        """Iterate elements in stored order. Each call starts over."""
        return iter(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return self.elements()

    def __len__(self) -> int:
        return len(self._elements)

    def is_empty(self) -> bool:
        """True if the scope holds no elements."""
        return len(self._elements) == 0

    def names(self) -> list[str]:
        return [e.name for e in self._elements]

    def find_by_name(self, name: str) -> Element:
        """
        Look up an element by name.

        Raises:
            NotFound: If no element has that name
        """
        try:
            return self._index[name]
        except KeyError:
            raise NotFound(f"No element '{name}' in scope '{self.kind}'") from None

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return (
            self.kind == other.kind and
            self.extracted == other.extracted and
            values_equal(self.attributes, other.attributes) and
            list(self._elements) == list(other._elements)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        flag = ", extracted" if self.extracted else ""
        return f"Scope({self.kind!r}, {len(self)} elements{flag})"
