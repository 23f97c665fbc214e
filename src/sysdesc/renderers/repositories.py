"""Renderer for the repositories scope."""
from ..model import Element
from .base import Renderer, register_renderer


@register_renderer("repositories")
class RepositoriesRenderer(Renderer):

    def display_name(self) -> str:
        return "Repositories"

    def element_summary(self, element: Element) -> str:
        summary = element.name
        alias = element.get("alias")
        if alias and alias != element.name:
            summary += f" ({alias})"
        summary += f": {element.get('url', '')}"
        if element.get("enabled") is False:
            summary += " [disabled]"
        return summary
