"""Render whole descriptions and description comparisons."""
from typing import Iterable, Optional, TextIO

from ..compare import DescriptionComparison
from ..errors import NotFound
from ..model import Description, sort_kinds
from .base import get_renderer


def render_description(
    description: Description,
    kinds: Optional[Iterable[str]] = None,
    sink: Optional[TextIO] = None,
) -> str:
    """
    Render every requested scope of a description.

    Raises:
        NotFound: If a requested scope is not part of the description
    """
    wanted = sort_kinds(set(kinds)) if kinds is not None else description.kinds()

    missing = [k for k in wanted if not description.has_scope(k)]
    if missing:
        raise NotFound(
            f"Description '{description.name}' does not contain scopes: {', '.join(missing)}"
        )

    text = "".join(get_renderer(kind).render(description[kind]) for kind in wanted)
    if sink is not None:
        sink.write(text)
    return text


def render_comparison(
    comparison: DescriptionComparison,
    show_all: bool = False,
    sink: Optional[TextIO] = None,
) -> str:
    """Render a description comparison, scope by scope."""
    parts = []

    for kind, result in comparison.results.items():
        parts.append(
            get_renderer(kind).render_comparison(
                result,
                comparison.name_a,
                comparison.name_b,
                show_all=show_all,
            )
        )

    if comparison.only_in_a_kinds:
        parts.append(
            f"# Scopes only in '{comparison.name_a}': "
            f"{', '.join(comparison.only_in_a_kinds)}\n\n"
        )
    if comparison.only_in_b_kinds:
        parts.append(
            f"# Scopes only in '{comparison.name_b}': "
            f"{', '.join(comparison.only_in_b_kinds)}\n\n"
        )

    if comparison.identical and not show_all:
        parts.append("Compared descriptions are identical.\n")

    text = "".join(parts)
    if sink is not None:
        sink.write(text)
    return text
