"""Renderers for the users and groups scopes."""
from ..model import Element
from .base import Renderer, format_value, register_renderer


@register_renderer("users")
class UsersRenderer(Renderer):

    def display_name(self) -> str:
        return "Users"

    def element_summary(self, element: Element) -> str:
        details = []
        comment = element.get("comment")
        if comment:
            details.append(format_value(comment))
        for key in ("uid", "gid", "shell"):
            value = element.get(key)
            if value is not None and value != "":
                details.append(f"{key}: {value}")

        if not details:
            return element.name
        return f"{element.name} ({', '.join(details)})"


@register_renderer("groups")
class GroupsRenderer(Renderer):

    def display_name(self) -> str:
        return "Groups"

    def element_summary(self, element: Element) -> str:
        details = []
        gid = element.get("gid")
        if gid is not None and gid != "":
            details.append(f"gid: {gid}")
        users = format_value(element.get("users"))
        if users:
            details.append(f"users: {users}")

        if not details:
            return element.name
        return f"{element.name} ({', '.join(details)})"
