"""Tests for elements, scopes and descriptions."""
import dataclasses

import pytest

from sysdesc.errors import MalformedDocument, NotFound
from sysdesc.model import Element, Scope, Description, values_equal


class TestValuesEqual:
    """Tests for structural attribute equality."""

    def test_scalars(self):
        assert values_equal("running", "running")
        assert not values_equal("running", "stopped")
        assert values_equal(3, 3)
        assert values_equal(None, None)

    def test_bool_never_equals_number(self):
        """Booleans and numbers are different value types."""
        assert not values_equal(True, 1)
        assert not values_equal(0, False)
        assert values_equal(True, True)

    def test_mapping_order_insensitive(self):
        assert values_equal({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})
        assert not values_equal({"a": 1}, {"a": 1, "b": 2})

    def test_sequence_order_sensitive(self):
        assert values_equal(["a", "b"], ["a", "b"])
        assert not values_equal(["a", "b"], ["b", "a"])
        assert values_equal(["a", "b"], ("a", "b"))

    def test_nested_structures(self):
        a = {"changes": ["md5", "mode"], "owner": {"user": "root", "group": "root"}}
        b = {"owner": {"group": "root", "user": "root"}, "changes": ["md5", "mode"]}
        assert values_equal(a, b)

    def test_mapping_vs_sequence(self):
        assert not values_equal({}, [])
        assert not values_equal("ab", ["a", "b"])


class TestElement:
    """Tests for Element."""

    def test_attribute_access(self):
        element = Element("sshd", {"state": "running"})

        assert element.name == "sshd"
        assert element["state"] == "running"
        assert element["name"] == "sshd"
        assert element.get("missing") is None
        assert element.get("missing", "x") == "x"
        assert "state" in element
        assert element.keys() == ["state"]

    def test_missing_attribute_raises_key_error(self):
        with pytest.raises(KeyError):
            Element("sshd")["state"]

    def test_immutable(self):
        """Elements can't be changed after construction."""
        source = {"state": "running", "deps": ["network"]}
        element = Element("sshd", source)

        source["state"] = "stopped"
        source["deps"].append("syslog")
        element.get("deps").append("other")

        assert element["state"] == "running"
        assert element["deps"] == ["network"]

        with pytest.raises(dataclasses.FrozenInstanceError):
            element.name = "cron"

        with pytest.raises(TypeError):
            element.attributes["state"] = "stopped"
        assert element["state"] == "running"

    def test_structural_equality(self):
        a = Element("sshd", {"state": "running", "opts": {"a": 1, "b": 2}})
        b = Element("sshd", {"opts": {"b": 2, "a": 1}, "state": "running"})

        assert a == b
        assert hash(a) == hash(b)
        assert a != Element("sshd", {"state": "stopped"})
        assert a != Element("cron", {"state": "running", "opts": {"a": 1, "b": 2}})

    def test_to_document_puts_name_first(self):
        element = Element("sshd", {"state": "running"})

        doc = element.to_document()

        assert list(doc.keys()) == ["name", "state"]
        assert Element.from_document(doc) == element


class TestScope:
    """Tests for Scope."""

    @pytest.fixture
    def services_doc(self):
        return {
            "kind": "services",
            "extracted": False,
            "attributes": {"init_system": "systemd"},
            "elements": [
                {"name": "sshd.service", "state": "enabled"},
                {"name": "cron.service", "state": "disabled"},
                {"name": "nscd.service", "state": "enabled", "limits": {"nofile": 1024}},
            ],
        }

    def test_from_document(self, services_doc):
        scope = Scope.from_document(services_doc, kind="services")

        assert scope.kind == "services"
        assert not scope.extracted
        assert scope.attributes == {"init_system": "systemd"}
        assert len(scope) == 3
        assert scope.names() == ["sshd.service", "cron.service", "nscd.service"]

    def test_round_trip(self, services_doc):
        """to_document and from_document are inverse."""
        scope = Scope.from_document(services_doc)

        doc = scope.to_document()

        assert doc == services_doc
        assert Scope.from_document(doc) == scope

    def test_round_trip_value_types(self):
        scope = Scope("users", [
            Element("root", {
                "uid": 0,
                "locked": False,
                "ratio": 0.5,
                "groups": ["root", "wheel"],
                "settings": {"shell": "/bin/bash", "expire": None},
            }),
        ], extracted=True)

        restored = Scope.from_document(scope.to_document(), kind="users")

        assert restored == scope
        assert restored.extracted
        assert restored.find_by_name("root")["settings"] == {"shell": "/bin/bash", "expire": None}

    def test_from_list(self):
        """A bare list of records is accepted."""
        scope = Scope.from_document([{"name": "vim"}], kind="packages")

        assert scope.kind == "packages"
        assert scope.names() == ["vim"]

    def test_kind_mismatch_is_malformed(self, services_doc):
        with pytest.raises(MalformedDocument) as exc:
            Scope.from_document(services_doc, kind="packages")

        assert "services" in str(exc.value)

    def test_record_without_name(self):
        with pytest.raises(MalformedDocument):
            Scope.from_document({"elements": [{"state": "enabled"}]}, kind="services")

    def test_record_with_empty_name(self):
        with pytest.raises(MalformedDocument):
            Scope.from_document([{"name": ""}], kind="services")

    def test_record_not_a_mapping(self):
        with pytest.raises(MalformedDocument):
            Scope.from_document(["sshd"], kind="services")

    def test_duplicate_names(self):
        with pytest.raises(MalformedDocument) as exc:
            Scope.from_document([{"name": "vim"}, {"name": "vim"}], kind="packages")

        assert "vim" in str(exc.value)

    def test_extracted_must_be_boolean(self):
        """A string flag is rejected instead of being read as true."""
        with pytest.raises(MalformedDocument):
            Scope.from_document(
                {"kind": "config_files", "extracted": "false", "elements": []}
            )

    def test_missing_kind(self):
        with pytest.raises(MalformedDocument):
            Scope.from_document({"elements": []})

    def test_elements_restartable(self, services_doc):
        """Each call to elements() starts from the beginning."""
        scope = Scope.from_document(services_doc)

        first = [e.name for e in scope.elements()]
        second = [e.name for e in scope.elements()]

        assert first == second == scope.names()

    def test_empty(self):
        assert Scope("services").is_empty()
        assert not Scope("services", [Element("sshd")]).is_empty()

    def test_find_by_name(self, services_doc):
        scope = Scope.from_document(services_doc)

        assert scope.find_by_name("cron.service")["state"] == "disabled"
        assert "cron.service" in scope

        with pytest.raises(NotFound):
            scope.find_by_name("missing.service")


class TestDescription:
    """Tests for Description."""

    @pytest.fixture
    def doc(self):
        return {
            "meta": {"format_version": 1, "hostname": "web01"},
            "services": {"elements": [{"name": "sshd.service", "state": "enabled"}]},
            "packages": {"elements": [{"name": "vim", "version": "9.0"}]},
            "unmanaged_files": {"extracted": True, "elements": [{"name": "/opt/app", "type": "dir"}]},
        }

    def test_from_document(self, doc):
        description = Description.from_document(doc, name="web01")

        assert description.name == "web01"
        assert description.hostname == "web01"
        assert description.kinds() == ["packages", "services", "unmanaged_files"]
        assert description["services"].find_by_name("sshd.service")["state"] == "enabled"
        assert description.extracted_kinds() == ["unmanaged_files"]

    def test_round_trip(self, doc):
        description = Description.from_document(doc, name="web01")

        restored = Description.from_document(description.to_document(), name="web01")

        assert restored.kinds() == description.kinds()
        for kind in description.kinds():
            assert restored[kind] == description[kind]
        assert restored.meta == description.meta

    def test_missing_scope(self, doc):
        description = Description.from_document(doc, name="web01")

        assert description.get("users") is None
        assert not description.has_scope("users")
        with pytest.raises(NotFound):
            description["users"]

    def test_unknown_kinds_sorted_last(self):
        description = Description(
            "x",
            scopes={
                "kernel_modules": Scope("kernel_modules"),
                "services": Scope("services"),
                "firewall": Scope("firewall"),
            },
        )

        assert description.kinds() == ["services", "firewall", "kernel_modules"]

    def test_malformed_scope(self):
        with pytest.raises(MalformedDocument):
            Description.from_document({"services": {"elements": [{}]}}, name="broken")

    def test_not_a_mapping(self):
        with pytest.raises(MalformedDocument):
            Description.from_document([], name="broken")

    def test_scope_file_dir(self, tmp_path, doc):
        description = Description.from_document(doc, name="web01", path=tmp_path)

        assert description.scope_file_dir("unmanaged_files") == tmp_path / "unmanaged_files"
        assert Description.from_document(doc, name="web01").scope_file_dir("unmanaged_files") is None
