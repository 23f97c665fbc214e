"""Tests for the scope comparator."""
import pytest

from sysdesc.compare import compare, compare_descriptions, differing_attributes
from sysdesc.errors import KindMismatch
from sysdesc.model import Element, Scope, Description


def services(*records) -> Scope:
    return Scope.from_document(list(records), kind="services")


SCOPE_PAIRS = [
    (services(), services()),
    (services({"name": "sshd", "state": "running"}), services()),
    (services(), services({"name": "cron", "state": "running"})),
    (
        services({"name": "sshd", "state": "running"}),
        services({"name": "sshd", "state": "stopped"}, {"name": "cron", "state": "running"}),
    ),
    (
        services(
            {"name": "a", "state": "running"},
            {"name": "b", "state": "running", "deps": ["x"]},
            {"name": "c", "state": "stopped"},
            {"name": "d"},
        ),
        services(
            {"name": "d", "state": "running"},
            {"name": "c", "state": "stopped"},
            {"name": "b", "state": "running", "deps": ["x", "y"]},
            {"name": "e"},
        ),
    ),
]


class TestCompare:
    """Tests for compare()."""

    def test_scenario_changed_and_only_in_b(self):
        a = services({"name": "sshd", "state": "running"})
        b = services({"name": "sshd", "state": "stopped"}, {"name": "cron", "state": "running"})

        result = compare(a, b)

        assert result.kind == "services"
        assert result.changed == [
            (Element("sshd", {"state": "running"}), Element("sshd", {"state": "stopped"}))
        ]
        assert result.only_in_b == [Element("cron", {"state": "running"})]
        assert result.only_in_a == []
        assert result.equal == []
        assert not result.identical
        assert result.total_changes == 2

    def test_kind_mismatch(self):
        with pytest.raises(KindMismatch) as exc:
            compare(services(), Scope("packages"))

        assert exc.value.kind_a == "services"
        assert exc.value.kind_b == "packages"

    def test_missing_key_counts_as_change(self):
        """An attribute defined on one side only makes elements differ."""
        a = services({"name": "sshd", "state": "running"})
        b = services({"name": "sshd", "state": "running", "enabled": True})

        result = compare(a, b)

        assert len(result.changed) == 1
        assert result.equal == []

    def test_none_differs_from_absent(self):
        a = services({"name": "sshd", "state": None})
        b = services({"name": "sshd"})

        assert len(compare(a, b).changed) == 1

    def test_nested_mapping_order_ignored(self):
        a = services({"name": "sshd", "limits": {"nofile": 1024, "nproc": 64}})
        b = services({"name": "sshd", "limits": {"nproc": 64, "nofile": 1024}})

        result = compare(a, b)

        assert result.changed == []
        assert len(result.equal) == 1

    def test_nested_sequence_order_matters(self):
        a = services({"name": "sshd", "deps": ["network", "syslog"]})
        b = services({"name": "sshd", "deps": ["syslog", "network"]})

        assert len(compare(a, b).changed) == 1

    def test_ordering(self):
        """Buckets keep the order of their source scope."""
        a = services({"name": "z"}, {"name": "m", "state": "on"}, {"name": "a"}, {"name": "k", "state": "on"})
        b = services({"name": "y"}, {"name": "k", "state": "off"}, {"name": "b"}, {"name": "m", "state": "off"})

        result = compare(a, b)

        assert [e.name for e in result.only_in_a] == ["z", "a"]
        assert [e.name for e in result.only_in_b] == ["y", "b"]
        assert [one.name for one, _ in result.changed] == ["m", "k"]

    @pytest.mark.parametrize("scope_a,scope_b", SCOPE_PAIRS)
    def test_totality(self, scope_a, scope_b):
        """Every element lands in exactly one bucket."""
        result = compare(scope_a, scope_b)

        a_side = (
            [e.name for e in result.only_in_a] +
            [one.name for one, _ in result.changed] +
            [e.name for e in result.equal]
        )
        b_side = (
            [e.name for e in result.only_in_b] +
            [two.name for _, two in result.changed] +
            [e.name for e in result.equal]
        )

        assert sorted(a_side) == sorted(scope_a.names())
        assert sorted(b_side) == sorted(scope_b.names())

    @pytest.mark.parametrize("scope_a,scope_b", SCOPE_PAIRS)
    def test_partition_symmetry(self, scope_a, scope_b):
        forward = compare(scope_a, scope_b)
        backward = compare(scope_b, scope_a)

        assert forward.only_in_a == backward.only_in_b
        assert forward.only_in_b == backward.only_in_a
        assert {one.name for one, _ in forward.changed} == {one.name for one, _ in backward.changed}

    @pytest.mark.parametrize("scope_a,scope_b", SCOPE_PAIRS)
    def test_idempotence(self, scope_a, scope_b):
        """Comparing a scope with itself finds no differences."""
        for scope in (scope_a, scope_b):
            result = compare(scope, scope)

            assert result.only_in_a == []
            assert result.only_in_b == []
            assert result.changed == []
            assert result.equal == list(scope.elements())
            assert result.identical

    def test_inputs_untouched(self):
        a = services({"name": "sshd", "state": "running"})
        b = services({"name": "sshd", "state": "stopped"})
        before = (a.to_document(), b.to_document())

        compare(a, b)

        assert (a.to_document(), b.to_document()) == before


class TestDifferingAttributes:
    """Tests for differing_attributes()."""

    def test_union_of_keys(self):
        a = Element("x", {"state": "on", "mode": "0644"})
        b = Element("x", {"state": "off", "user": "root", "mode": "0644"})

        assert differing_attributes(a, b) == ["state", "user"]

    def test_no_difference(self):
        a = Element("x", {"state": "on"})

        assert differing_attributes(a, Element("x", {"state": "on"})) == []


class TestCompareDescriptions:
    """Tests for compare_descriptions()."""

    @pytest.fixture
    def descriptions(self):
        a = Description.from_document({
            "services": {"elements": [{"name": "sshd", "state": "enabled"}]},
            "packages": {"elements": [{"name": "vim", "version": "9.0"}]},
            "users": {"elements": [{"name": "root", "uid": 0}]},
        }, name="web01")
        b = Description.from_document({
            "services": {"elements": [{"name": "sshd", "state": "disabled"}]},
            "packages": {"elements": [{"name": "vim", "version": "9.0"}]},
            "groups": {"elements": [{"name": "root", "gid": 0}]},
        }, name="web02")
        return a, b

    def test_scopes_in_both(self, descriptions):
        a, b = descriptions

        comparison = compare_descriptions(a, b)

        assert comparison.name_a == "web01"
        assert comparison.name_b == "web02"
        assert list(comparison.results) == ["packages", "services"]
        assert comparison.results["packages"].identical
        assert len(comparison.results["services"].changed) == 1
        assert comparison.only_in_a_kinds == ["users"]
        assert comparison.only_in_b_kinds == ["groups"]
        assert not comparison.identical

    def test_restricted_kinds(self, descriptions):
        a, b = descriptions

        comparison = compare_descriptions(a, b, kinds=["packages"])

        assert list(comparison.results) == ["packages"]
        assert comparison.only_in_a_kinds == []
        assert comparison.identical

    def test_requested_kind_missing_everywhere(self, descriptions):
        a, b = descriptions

        comparison = compare_descriptions(a, b, kinds=["patterns"])

        assert comparison.results == {}
        assert comparison.identical
