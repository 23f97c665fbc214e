"""Data model: elements, scopes and descriptions."""
from .element import Element, values_equal, ABSENT
from .scope import Scope
from .description import (
    Description,
    SCOPE_ORDER,
    FILE_SCOPES,
    MANIFEST_FILE,
    sort_kinds,
)

__all__ = [
    "Element",
    "values_equal",
    "ABSENT",
    "Scope",
    "Description",
    "SCOPE_ORDER",
    "FILE_SCOPES",
    "MANIFEST_FILE",
    "sort_kinds",
]
