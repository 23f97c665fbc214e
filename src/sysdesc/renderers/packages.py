"""Renderers for software scopes (packages and patterns)."""
from ..model import Element
from .base import Renderer, register_renderer


@register_renderer("packages")
class PackagesRenderer(Renderer):

    def display_name(self) -> str:
        return "Packages"

    def element_summary(self, element: Element) -> str:
        """Format as name-version-release.arch, leaving out missing parts."""
        summary = element.name
        for part in ("version", "release"):
            value = element.get(part)
            if value:
                summary += f"-{value}"
        arch = element.get("arch")
        if arch:
            summary += f".{arch}"
        return summary


@register_renderer("patterns")
class PatternsRenderer(Renderer):

    def display_name(self) -> str:
        return "Patterns"

    def element_summary(self, element: Element) -> str:
        version = element.get("version")
        if version:
            return f"{element.name} ({version})"
        return element.name
