"""Renderer for the services scope."""
from ..model import Element
from .base import Renderer, register_renderer


@register_renderer("services")
class ServicesRenderer(Renderer):

    def display_name(self) -> str:
        return "Services"

    def element_summary(self, element: Element) -> str:
        return f"{element.name}: {element.get('state', '')}"
