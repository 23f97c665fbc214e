"""sysdesc - compare system descriptions and export them as install profiles.

Usage:
    from sysdesc import DescriptionStore, compare, get_renderer

    store = DescriptionStore()
    a = store.load("web01")
    b = store.load("web02")

    result = compare(a["services"], b["services"])
    print(get_renderer("services").render_comparison(result, a.name, b.name))
"""

from .errors import (
    SysdescError,
    MalformedDocument,
    KindMismatch,
    NotFound,
    ConfigError,
    TargetUnwritable,
    ExportFailed,
)
from .model import Element, Scope, Description
from .store import DescriptionStore
from .compare import compare, compare_descriptions, ComparisonResult, DescriptionComparison
from .renderers import get_renderer, render_description, render_comparison
from .export import AutoinstallExporter
from .config import Settings

__version__ = "0.1.0"

__all__ = [
    "SysdescError",
    "MalformedDocument",
    "KindMismatch",
    "NotFound",
    "ConfigError",
    "TargetUnwritable",
    "ExportFailed",
    "Element",
    "Scope",
    "Description",
    "DescriptionStore",
    "compare",
    "compare_descriptions",
    "ComparisonResult",
    "DescriptionComparison",
    "get_renderer",
    "render_description",
    "render_comparison",
    "AutoinstallExporter",
    "Settings",
]
