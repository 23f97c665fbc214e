"""AutoYaST profile generation.

Maps the scopes of a description to an ``autoinst.xml`` document. The
output is serialized by lxml and is byte-for-byte stable for a given
description, since the installer tooling downstream parses it.
"""
import fnmatch
import logging
import posixpath
import shlex
from typing import Iterable, Optional
from urllib.parse import quote

from lxml import etree

from ..model import Description, Element, Scope, FILE_SCOPES

logger = logging.getLogger(__name__)

YAST_NS = "http://www.suse.com/1.0/yast2ns"
CONFIG_NS = "http://www.suse.com/1.0/configns"
CONFIG_TYPE = f"{{{CONFIG_NS}}}type"

# Scopes that contribute to the profile, in document order
PROFILE_SCOPES = [
    "packages",
    "patterns",
    "repositories",
    "users",
    "groups",
    "services",
] + FILE_SCOPES

URL_FILE = "/tmp/description_url"

# Reads the description URL from the autoyast= boot parameter, asks for it
# when the installation was not started that way
URL_EXTRACTION_SCRIPT = r"""sed -n '/.*autoyast2\?=\(.*\)\/.*[^\s]*/s//\1/p' /proc/cmdline > /tmp/description_url
if [ ! -s /tmp/description_url ]; then
  echo 'Enter URL to system description:'
  read description_url
  echo $description_url > /tmp/description_url
fi"""

SERVICE_STATES = {
    "enabled": "enable",
    "on": "enable",
    "disabled": "disable",
    "off": "disable",
}


def is_excluded(path: str, excludes: Iterable[str]) -> bool:
    """Check a system path against exclusion patterns (fnmatch style)."""
    return any(fnmatch.fnmatchcase(path, pattern) for pattern in excludes)


def _join(value) -> str:
    """Comma-join a list attribute; scalars are used as they are."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class ProfileBuilder:
    """Build an AutoYaST profile from a description."""

    def __init__(self, description: Description, excludes: Optional[list[str]] = None):
        """
        Args:
            description: Description to export
            excludes: Path patterns left out of file retrieval
        """
        self.description = description
        self.excludes = list(excludes or [])

    def build(self) -> str:
        """
        Generate the profile document.

        Returns:
            XML text including the XML declaration
        """
        root = etree.Element(
            self._tag("profile"),
            nsmap={None: YAST_NS, "config": CONFIG_NS},
        )

        self._apply_software(root)
        self._apply_repositories(root)
        self._apply_users(root)
        self._apply_groups(root)
        self._apply_services(root)
        self._apply_scripts(root)

        skipped = [k for k in self.description.kinds() if k not in PROFILE_SCOPES]
        if skipped:
            logger.debug(f"Scopes not supported by the profile: {', '.join(skipped)}")

        return etree.tostring(
            root,
            pretty_print=True,
            xml_declaration=True,
            encoding="UTF-8",
        ).decode("utf-8")

    def _tag(self, name: str) -> str:
        return f"{{{YAST_NS}}}{name}"

    def _add(
        self,
        parent: etree._Element,
        name: str,
        text: Optional[str] = None,
        config_type: Optional[str] = None,
    ) -> etree._Element:
        attrib = {CONFIG_TYPE: config_type} if config_type else {}
        element = etree.SubElement(parent, self._tag(name), attrib)
        if text is not None:
            element.text = text
        return element

    def _scope(self, kind: str) -> Optional[Scope]:
        return self.description.get(kind)

    # === Software ===

    def _apply_software(self, root: etree._Element) -> None:
        packages = self._scope("packages")
        patterns = self._scope("patterns")
        if packages is None and patterns is None:
            return

        software = self._add(root, "software")

        if packages is not None:
            package_list = self._add(software, "packages", config_type="list")
            for package in packages:
                self._add(package_list, "package", package.name)

        if patterns is not None:
            pattern_list = self._add(software, "patterns", config_type="list")
            for pattern in patterns:
                self._add(pattern_list, "pattern", pattern.name)

    def _apply_repositories(self, root: etree._Element) -> None:
        repositories = self._scope("repositories")
        if repositories is None:
            return

        add_on = self._add(root, "add-on")
        products = self._add(add_on, "add_on_products", config_type="list")

        for repository in repositories:
            url = repository.get("url")
            if not url or repository.get("enabled") is False:
                logger.debug(f"Skipping repository '{repository.name}' in profile")
                continue

            entry = self._add(products, "listentry")
            self._add(entry, "media_url", str(url))
            self._add(entry, "product", repository.name)
            self._add(entry, "alias", str(repository.get("alias") or repository.name))

            priority = repository.get("priority")
            if isinstance(priority, int) and not isinstance(priority, bool):
                self._add(entry, "priority", str(priority), config_type="integer")

    # === Users and groups ===

    def _apply_users(self, root: etree._Element) -> None:
        users = self._scope("users")
        if users is None:
            return

        user_list = self._add(root, "users", config_type="list")
        for user in users:
            entry = self._add(user_list, "user")
            self._add(entry, "username", user.name)
            self._add_optional(entry, "fullname", user, "comment")
            self._add_optional(entry, "uid", user, "uid")
            self._add_optional(entry, "gid", user, "gid")
            self._add_optional(entry, "home", user, "home")
            self._add_optional(entry, "shell", user, "shell")

            password = user.get("encrypted_password")
            if password:
                self._add(entry, "user_password", str(password))
                self._add(entry, "encrypted", "true", config_type="boolean")

    def _apply_groups(self, root: etree._Element) -> None:
        groups = self._scope("groups")
        if groups is None:
            return

        group_list = self._add(root, "groups", config_type="list")
        for group in groups:
            entry = self._add(group_list, "group")
            self._add(entry, "groupname", group.name)
            self._add_optional(entry, "gid", group, "gid")

            password = group.get("password")
            if password:
                self._add(entry, "group_password", str(password))
                self._add(entry, "encrypted", "true", config_type="boolean")

            self._add(entry, "userlist", _join(group.get("users")))

    def _add_optional(
        self,
        parent: etree._Element,
        name: str,
        element: Element,
        attribute: str,
    ) -> None:
        value = element.get(attribute)
        if value is not None and value != "":
            self._add(parent, name, str(value))

    # === Services ===

    def _apply_services(self, root: etree._Element) -> None:
        services = self._scope("services")
        if services is None:
            return

        grouped: dict[str, list[str]] = {"enable": [], "disable": []}
        for service in services:
            action = SERVICE_STATES.get(str(service.get("state", "")))
            if action is None:
                continue
            name = service.name
            if name.endswith(".service"):
                name = name[:-len(".service")]
            grouped[action].append(name)

        manager = self._add(root, "services-manager")
        service_settings = self._add(manager, "services")
        for action in ("enable", "disable"):
            action_list = self._add(service_settings, action, config_type="list")
            for name in grouped[action]:
                self._add(action_list, "service", name)

    # === Files ===

    def _extracted_file_scopes(self) -> list[Scope]:
        scopes = []
        for kind in FILE_SCOPES:
            scope = self._scope(kind)
            if scope is not None and scope.extracted:
                scopes.append(scope)
        return scopes

    def _apply_scripts(self, root: etree._Element) -> None:
        scopes = self._extracted_file_scopes()
        if not scopes:
            # Nothing to download, so never ask for the description URL
            return

        commands = []
        for scope in scopes:
            commands.extend(self._file_commands(scope))

        scripts = self._add(root, "scripts")

        pre_scripts = self._add(scripts, "pre-scripts", config_type="list")
        script = self._add(pre_scripts, "script")
        source = self._add(script, "source")
        source.text = etree.CDATA(URL_EXTRACTION_SCRIPT)

        if commands:
            chroot_scripts = self._add(scripts, "chroot-scripts", config_type="list")
            script = self._add(chroot_scripts, "script")
            self._add(script, "chrooted", "false", config_type="boolean")
            source = self._add(script, "source")
            source.text = etree.CDATA("\n".join(commands))

    def _file_commands(self, scope: Scope) -> list[str]:
        """Shell commands restoring the files of one extracted scope under /mnt."""
        commands = []

        for entry in scope:
            path = entry.name
            if is_excluded(path, self.excludes):
                logger.debug(f"Excluding {path} from profile")
                continue

            target = posixpath.join("/mnt", path.lstrip("/"))
            file_type = entry.get("type", "file")
            changes = entry.get("changes") or []

            if "deleted" in changes:
                commands.append(f"rm -rf {shlex.quote(target)}")
                continue

            if file_type == "dir":
                commands.append(f"mkdir -p {shlex.quote(target)}")
            else:
                url = quote(f"/{scope.kind}{path}")
                commands.append(f"mkdir -p {shlex.quote(posixpath.dirname(target))}")
                commands.append(
                    f"curl -s -o {shlex.quote(target)} \"$(cat {URL_FILE})\"{shlex.quote(url)}"
                )

            mode = entry.get("mode")
            if mode and file_type != "link":
                commands.append(f"chmod {shlex.quote(str(mode))} {shlex.quote(target)}")

            user = entry.get("user")
            if user:
                owner = f"{user}:{entry.get('group')}" if entry.get("group") else str(user)
                commands.append(
                    f"chroot /mnt chown --no-dereference {shlex.quote(owner)} {shlex.quote(path)}"
                )

        return commands
