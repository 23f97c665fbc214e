"""Text renderers, one per scope kind.

Usage:
    from sysdesc.renderers import get_renderer

    renderer = get_renderer("services")
    print(renderer.render(description["services"]))
"""
from .base import (
    Renderer,
    GenericRenderer,
    RENDERERS,
    register_renderer,
    get_renderer,
    format_value,
)
from .services import ServicesRenderer
from .packages import PackagesRenderer, PatternsRenderer
from .repositories import RepositoriesRenderer
from .users import UsersRenderer, GroupsRenderer
from .files import FilesRenderer
from .report import render_description, render_comparison

__all__ = [
    "Renderer",
    "GenericRenderer",
    "RENDERERS",
    "register_renderer",
    "get_renderer",
    "format_value",
    "ServicesRenderer",
    "PackagesRenderer",
    "PatternsRenderer",
    "RepositoriesRenderer",
    "UsersRenderer",
    "GroupsRenderer",
    "FilesRenderer",
    "render_description",
    "render_comparison",
]
