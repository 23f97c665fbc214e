"""Renderer for file scopes (config files, changed managed files, unmanaged files)."""
from ..model import Element
from .base import Renderer, format_value, register_renderer

DISPLAY_NAMES = {
    "config_files": "Configuration Files",
    "changed_managed_files": "Changed Managed Files",
    "unmanaged_files": "Unmanaged Files",
}


@register_renderer(*DISPLAY_NAMES)
class FilesRenderer(Renderer):
    """Lists file paths with their type, or their changes if recorded."""

    def display_name(self) -> str:
        return DISPLAY_NAMES.get(self.kind, self.kind.replace("_", " ").title())

    def element_summary(self, element: Element) -> str:
        changes = element.get("changes")
        if isinstance(changes, (list, tuple)):
            changes = ", ".join(format_value(c) for c in changes)
        else:
            changes = format_value(changes)
        if changes:
            return f"{element.name} ({changes})"
        file_type = element.get("type")
        if file_type:
            return f"{element.name} ({file_type})"
        return element.name
