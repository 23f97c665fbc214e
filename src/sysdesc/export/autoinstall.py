"""AutoYaST export bundle writer.

Writes a directory an installer can be pointed at:

    <target>/
    ├── manifest.json                   # Copy of the description
    ├── autoinst.xml                    # Generated profile
    ├── unmanaged_files_build_excludes  # Exclusion list (extracted scopes only)
    ├── README.md                       # Provenance and caveats
    └── <kind>/                         # Extracted files per scope
"""
import json
import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..config import Settings
from ..errors import ExportFailed, TargetUnwritable
from ..model import Description, MANIFEST_FILE
from ..utils.logging_config import timed, timed_section
from .profile import ProfileBuilder, is_excluded

logger = logging.getLogger(__name__)

README_FILE = "README.md"

README_TEMPLATE = """# AutoYaST export of system description '{name}'

This directory was generated from the system description '{name}'{host_note}
on {exported_at}.

## Contents

- `{manifest}`: the exported system description
- `{profile}`: the AutoYaST profile
{extra_contents}- `README.md`: this file

Exported scopes: {scopes}

## Installation

Serve this directory via HTTP and boot the installation with the boot
parameter

    autoyast=http://<server>/<path>/{profile}

{url_note}
## Caveats

- The profile reproduces the captured configuration only. Hardware specific
  settings such as partitioning and network setup are left to the installer.
- Files matching the exclusion list are neither copied into this directory
  nor restored on the target system.
- Users and groups are created with the password hashes found on the
  inspected system.
"""

URL_NOTE_EXTRACTED = """Extracted files are downloaded from the same location during installation.
If the installer cannot determine the location it asks for the URL of this
directory.
"""

URL_NOTE_NOT_EXTRACTED = """No file content was extracted for this description, so the profile does
not download any files.
"""


class AutoinstallExporter:
    """Export a description as an AutoYaST profile bundle."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Args:
            settings: Application settings (default: Settings())
        """
        self.settings = settings or Settings()

    @property
    def profile_name(self) -> str:
        return self.settings.export.profile_name

    @property
    def excludes_file(self) -> str:
        return self.settings.export.excludes_file

    def profile(self, description: Description) -> str:
        """Generate the profile document for a description."""
        builder = ProfileBuilder(description, excludes=self.settings.export.excludes)
        return builder.build()

    @timed("export")
    def export(self, description: Description, target_dir) -> Path:
        """
        Write the export bundle for a description.

        Every step is attempted even if an earlier one failed; a partial
        bundle is left behind in that case.

        Args:
            description: Description to export
            target_dir: Directory to write to (created if missing)

        Returns:
            Path of the bundle directory

        Raises:
            TargetUnwritable: If target_dir can't be created or written to
            ExportFailed: If any write step failed
        """
        target = self._prepare_target(Path(target_dir))
        extracted = description.extracted_kinds()

        logger.info(f"Exporting description '{description.name}' to {target}")

        steps: list[tuple[str, Callable[[], None]]] = [
            ("manifest", lambda: self._write_manifest(description, target)),
            ("profile", lambda: self._write_profile(description, target)),
        ]
        if extracted:
            steps.append(("files", lambda: self._copy_files(description, target, extracted)))
            steps.append(("excludes", lambda: self._write_excludes(target)))
        steps.append(("readme", lambda: self._write_readme(description, target)))

        failures: list[tuple[str, Exception]] = []
        for step_name, step in steps:
            try:
                with timed_section(f"export_{step_name}", description=description.name):
                    step()
            except (OSError, ValueError, TypeError) as e:
                logger.error(f"Export step '{step_name}' failed: {e}")
                failures.append((step_name, e))

        if failures:
            raise ExportFailed(str(target), failures)

        logger.info(
            f"Note: The permissions of {target} are restricted to the current user "
            f"because the bundle may contain password hashes and private files"
        )
        return target

    def _prepare_target(self, target: Path) -> Path:
        """Create the target directory and check it is writable."""
        if target.exists() and not target.is_dir():
            raise TargetUnwritable(str(target), "not a directory")

        try:
            target.mkdir(parents=True, exist_ok=True)
            target.chmod(0o700)
        except OSError as e:
            raise TargetUnwritable(str(target), str(e)) from e

        if not os.access(target, os.W_OK | os.X_OK):
            raise TargetUnwritable(str(target), "permission denied")

        return target

    def _write_manifest(self, description: Description, target: Path) -> None:
        source = description.path / MANIFEST_FILE if description.path else None

        if source is not None and source.is_file():
            shutil.copy2(source, target / MANIFEST_FILE)
        else:
            (target / MANIFEST_FILE).write_text(
                json.dumps(description.to_document(), indent=2) + "\n",
                encoding="utf-8",
            )

    def _write_profile(self, description: Description, target: Path) -> None:
        (target / self.profile_name).write_text(self.profile(description), encoding="utf-8")

    def _copy_files(self, description: Description, target: Path, kinds: list[str]) -> None:
        """Copy extracted file trees, leaving out excluded paths."""
        errors = []

        for kind in kinds:
            source = description.scope_file_dir(kind)
            if source is None:
                logger.warning(
                    f"Scope '{kind}' is marked extracted but description "
                    f"'{description.name}' is not stored on disk; no files copied"
                )
                continue

            if not source.is_dir():
                errors.append((str(source), str(target / kind), "extracted files not found"))
                continue

            try:
                shutil.copytree(
                    source,
                    target / kind,
                    ignore=self._exclusion_filter(source),
                    symlinks=True,
                    dirs_exist_ok=True,
                )
            except shutil.Error as e:
                errors.extend(e.args[0])

            logger.debug(f"Copied extracted files of scope '{kind}'")

        if errors:
            raise shutil.Error(errors)

    def _exclusion_filter(self, source: Path) -> Callable[[str, list[str]], set[str]]:
        excludes = self.settings.export.excludes

        def ignore(directory: str, names: list[str]) -> set[str]:
            relative = Path(directory).relative_to(source)
            system_dir = "/" + relative.as_posix() if relative.parts else ""
            return {
                name for name in names
                if is_excluded(f"{system_dir}/{name}", excludes)
            }

        return ignore

    def _write_excludes(self, target: Path) -> None:
        excludes = self.settings.export.excludes
        content = "".join(f"{pattern}\n" for pattern in excludes)
        (target / self.excludes_file).write_text(content, encoding="utf-8")

    def _write_readme(self, description: Description, target: Path) -> None:
        extracted = description.extracted_kinds()

        extra_contents = ""
        if extracted:
            extra_contents += f"- `{self.excludes_file}`: paths excluded from file copies\n"
            for kind in extracted:
                extra_contents += f"- `{kind}/`: extracted files of scope {kind}\n"

        host_note = f" (host {description.hostname})" if description.hostname else ""
        readme = README_TEMPLATE.format(
            name=description.name,
            host_note=host_note,
            exported_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
            manifest=MANIFEST_FILE,
            profile=self.profile_name,
            extra_contents=extra_contents,
            scopes=", ".join(description.kinds()) or "none",
            url_note=URL_NOTE_EXTRACTED if extracted else URL_NOTE_NOT_EXTRACTED,
        )
        (target / README_FILE).write_text(readme, encoding="utf-8")
