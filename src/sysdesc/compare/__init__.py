"""Scope and description comparison."""
from .comparator import (
    compare,
    compare_descriptions,
    differing_attributes,
    ComparisonResult,
    DescriptionComparison,
)

__all__ = [
    "compare",
    "compare_descriptions",
    "differing_attributes",
    "ComparisonResult",
    "DescriptionComparison",
]
