"""Export of descriptions as automated-install bundles.

Usage:
    from sysdesc.export import AutoinstallExporter

    exporter = AutoinstallExporter(settings)
    exporter.export(description, "/srv/www/autoyast/web01")
"""
from .autoinstall import AutoinstallExporter, README_FILE
from .profile import ProfileBuilder, is_excluded, PROFILE_SCOPES, URL_EXTRACTION_SCRIPT

__all__ = [
    "AutoinstallExporter",
    "README_FILE",
    "ProfileBuilder",
    "is_excluded",
    "PROFILE_SCOPES",
    "URL_EXTRACTION_SCRIPT",
]
