"""Base renderer and kind registry.

Every scope kind gets one renderer. Renderers turn a scope, or the
changed pairs of a comparison, into plain text lists:

    # Services

      * sshd.service: enabled
      * cron.service: disabled

"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, TextIO

from ..compare import ComparisonResult
from ..model import Element, Scope, values_equal

logger = logging.getLogger(__name__)

ITEM_INDENT = "  "
SECTION_ITEM_INDENT = "    "

# Kind registry, filled by @register_renderer
RENDERERS: dict[str, type["Renderer"]] = {}


def register_renderer(*kinds: str):
    """Class decorator registering a renderer for one or more scope kinds."""
    def decorator(cls: type["Renderer"]) -> type["Renderer"]:
        for kind in kinds:
            RENDERERS[kind] = cls
        return cls
    return decorator


def get_renderer(kind: str) -> "Renderer":
    """
    Get the renderer for a scope kind.

    Unknown kinds get a GenericRenderer, which lists element names.
    """
    renderer_class = RENDERERS.get(kind)
    if renderer_class is None:
        logger.debug(f"No renderer registered for '{kind}', using generic renderer")
        return GenericRenderer(kind)
    return renderer_class(kind)


def format_value(value: Any) -> str:
    """Format an attribute value for a single text line."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict):
        return ", ".join(f"{k}={format_value(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(v) for v in value)
    return str(value)


class Renderer(ABC):
    """Renders one kind of scope as text."""

    def __init__(self, kind: str):
        self.kind = kind

    @abstractmethod
    def display_name(self) -> str:
        """Heading used for this scope."""
        ...

    @abstractmethod
    def element_summary(self, element: Element) -> str:
        """One-line summary of an element."""
        ...

    def empty_message(self) -> str:
        return f"There are no {self.kind.replace('_', ' ')}."

    def content(self, scope: Scope) -> str:
        """
        List all elements of a scope, one line each.

        An empty scope renders as a single "There are no ..." line.
        """
        if scope.is_empty():
            return self._list([self.empty_message()], bullet=False)
        return self._list(self.element_summary(e) for e in scope.elements())

    def compare_content_changed(
        self,
        changed_elements: Iterable[tuple[Element, Element]],
        indent: str = ITEM_INDENT,
    ) -> str:
        """
        Describe changed element pairs, one line per pair.

        Only attributes defined on the first element of a pair are checked,
        so an attribute that exists only on the second element never shows up.
        """
        items = []
        for one, two in changed_elements:
            changes = []
            for attribute in one.keys():
                if not values_equal(one.raw(attribute), two.raw(attribute)):
                    changes.append(
                        f"{attribute}: {format_value(one.get(attribute))} <> "
                        f"{format_value(two.get(attribute))}"
                    )
            items.append(f"{one.name} ({', '.join(changes)})")
        return self._list(items, indent=indent)

    def render(self, scope: Scope, sink: Optional[TextIO] = None) -> str:
        """Render a scope as a titled list, optionally writing it to sink."""
        text = self._heading() + self.content(scope) + "\n"
        if sink is not None:
            sink.write(text)
        return text

    def render_comparison(
        self,
        result: ComparisonResult,
        name_a: str,
        name_b: str,
        show_all: bool = False,
        sink: Optional[TextIO] = None,
    ) -> str:
        """
        Render a comparison result as a titled list of sections.

        Args:
            result: Comparison of two scopes of this kind
            name_a: Name of the first description
            name_b: Name of the second description
            show_all: Also list elements common to both
            sink: Optional stream to write the text to
        """
        sections = []

        if result.only_in_a:
            sections.append(
                f"{ITEM_INDENT}Only in '{name_a}':\n" +
                self._list(
                    (self.element_summary(e) for e in result.only_in_a),
                    indent=SECTION_ITEM_INDENT,
                )
            )

        if result.only_in_b:
            sections.append(
                f"{ITEM_INDENT}Only in '{name_b}':\n" +
                self._list(
                    (self.element_summary(e) for e in result.only_in_b),
                    indent=SECTION_ITEM_INDENT,
                )
            )

        if result.changed:
            sections.append(
                f"{ITEM_INDENT}In both with different attributes ('{name_a}' <> '{name_b}'):\n" +
                self.compare_content_changed(result.changed, indent=SECTION_ITEM_INDENT)
            )

        if show_all and result.equal:
            sections.append(
                f"{ITEM_INDENT}Common to both:\n" +
                self._list(
                    (self.element_summary(e) for e in result.equal),
                    indent=SECTION_ITEM_INDENT,
                )
            )

        if not sections:
            text = ""
        else:
            text = self._heading() + "\n".join(sections) + "\n"

        if sink is not None:
            sink.write(text)
        return text

    def _heading(self) -> str:
        return f"# {self.display_name()}\n\n"

    def _list(
        self,
        items: Iterable[str],
        indent: str = ITEM_INDENT,
        bullet: bool = True,
    ) -> str:
        prefix = f"{indent}* " if bullet else indent
        return "".join(f"{prefix}{item}\n" for item in items)


class GenericRenderer(Renderer):
    """Fallback for scope kinds without a dedicated renderer."""

    def display_name(self) -> str:
        return self.kind.replace("_", " ").title()

    def element_summary(self, element: Element) -> str:
        return element.name
