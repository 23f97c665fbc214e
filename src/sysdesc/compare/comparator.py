"""Comparator for calculating differences between two scopes.

Elements are matched by name; matched pairs are compared attribute by
attribute over the union of both key sets.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..errors import KindMismatch
from ..model import Description, Element, Scope, values_equal, sort_kinds
from ..utils.logging_config import timed

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    """Classified diff of two scopes of the same kind."""
    kind: str
    only_in_a: list[Element] = field(default_factory=list)
    only_in_b: list[Element] = field(default_factory=list)
    changed: list[tuple[Element, Element]] = field(default_factory=list)
    equal: list[Element] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        """True if both scopes hold the same elements."""
        return (
            len(self.only_in_a) == 0 and
            len(self.only_in_b) == 0 and
            len(self.changed) == 0
        )

    @property
    def total_changes(self) -> int:
        """Number of elements that differ in any way."""
        return len(self.only_in_a) + len(self.only_in_b) + len(self.changed)


@dataclass
class DescriptionComparison:
    """Scope-by-scope comparison of two descriptions."""
    name_a: str
    name_b: str
    results: dict[str, ComparisonResult] = field(default_factory=dict)
    only_in_a_kinds: list[str] = field(default_factory=list)
    only_in_b_kinds: list[str] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return (
            not self.only_in_a_kinds and
            not self.only_in_b_kinds and
            all(r.identical for r in self.results.values())
        )


def differing_attributes(a: Element, b: Element) -> list[str]:
    """
    Attribute keys whose values differ between two elements.

    Keys are taken from both sides (a's order first); a key defined on one
    side only counts as a difference.
    """
    keys = list(a.keys()) + [k for k in b.keys() if k not in a.attributes]
    return [
        key for key in keys
        if not values_equal(a.raw(key), b.raw(key))
    ]


@timed("compare")
def compare(scope_a: Scope, scope_b: Scope) -> ComparisonResult:
    """
    Compare two scopes of the same kind.

    Args:
        scope_a: First scope
        scope_b: Second scope

    Returns:
        ComparisonResult; only_in_a, changed and equal follow scope_a's
        order, only_in_b follows scope_b's order

    Raises:
        KindMismatch: If the scopes are of different kinds
    """
    if scope_a.kind != scope_b.kind:
        raise KindMismatch(scope_a.kind, scope_b.kind)

    # Build lookup map
    index = {e.name: e for e in scope_b.elements()}
    consumed: set[str] = set()

    result = ComparisonResult(kind=scope_a.kind)

    for element in scope_a.elements():
        other = index.get(element.name)
        if other is None:
            result.only_in_a.append(element)
            continue

        consumed.add(other.name)
        if differing_attributes(element, other):
            result.changed.append((element, other))
        else:
            result.equal.append(element)

    result.only_in_b = [e for e in scope_b.elements() if e.name not in consumed]

    logger.debug(
        f"Compared scope '{result.kind}': {len(result.only_in_a)} only in A, "
        f"{len(result.only_in_b)} only in B, {len(result.changed)} changed, "
        f"{len(result.equal)} equal"
    )
    return result


def compare_descriptions(
    description_a: Description,
    description_b: Description,
    kinds: Optional[Iterable[str]] = None,
) -> DescriptionComparison:
    """
    Compare two descriptions scope by scope.

    Args:
        description_a: First description
        description_b: Second description
        kinds: Restrict to these scope kinds (default: all present in either)

    Returns:
        DescriptionComparison with one result per kind present in both
    """
    if kinds is None:
        wanted = sort_kinds(set(description_a.kinds()) | set(description_b.kinds()))
    else:
        wanted = sort_kinds(set(kinds))

    comparison = DescriptionComparison(
        name_a=description_a.name,
        name_b=description_b.name,
    )

    for kind in wanted:
        in_a = description_a.has_scope(kind)
        in_b = description_b.has_scope(kind)

        if in_a and in_b:
            comparison.results[kind] = compare(description_a[kind], description_b[kind])
        elif in_a:
            comparison.only_in_a_kinds.append(kind)
        elif in_b:
            comparison.only_in_b_kinds.append(kind)

    return comparison
