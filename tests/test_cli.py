"""Tests for the command line interface."""
import pytest

from sysdesc.cli import main
from sysdesc.model import Description
from sysdesc.store import DescriptionStore


@pytest.fixture
def store_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SYSDESC_STORE_DIR", raising=False)
    monkeypatch.delenv("SYSDESC_CONFIG", raising=False)

    store = DescriptionStore(tmp_path / "store")
    store.save(Description.from_document({
        "services": {"elements": [
            {"name": "sshd", "state": "running"},
        ]},
    }, name="web01"))
    store.save(Description.from_document({
        "services": {"elements": [
            {"name": "sshd", "state": "stopped"},
            {"name": "cron", "state": "running"},
        ]},
    }, name="web02"))
    return store.base_dir


class TestCli:
    """Tests for sysdesc commands."""

    def test_show(self, store_dir, capsys):
        assert main(["--store", str(store_dir), "show", "web01"]) == 0

        out = capsys.readouterr().out
        assert out == "# Services\n\n  * sshd: running\n\n"

    def test_compare(self, store_dir, capsys):
        assert main(["--store", str(store_dir), "compare", "web01", "web02"]) == 0

        out = capsys.readouterr().out
        assert "  Only in 'web02':\n    * cron: running\n" in out
        assert "    * sshd (state: running <> stopped)\n" in out

    def test_compare_show_all(self, store_dir, capsys):
        assert main(["--store", str(store_dir), "compare", "web01", "web01", "--show-all"]) == 0

        out = capsys.readouterr().out
        assert "Common to both:" in out

    def test_export(self, store_dir, tmp_path):
        target = tmp_path / "bundle"

        assert main([
            "--store", str(store_dir), "export-autoinstall", "web01", "--target", str(target),
        ]) == 0

        assert (target / "autoinst.xml").is_file()
        assert (target / "manifest.json").is_file()
        assert (target / "README.md").is_file()

    def test_missing_description(self, store_dir):
        assert main(["--store", str(store_dir), "show", "missing"]) == 1

    def test_invalid_name(self, store_dir):
        assert main(["--store", str(store_dir), "show", "../etc"]) == 1

    def test_missing_scope(self, store_dir):
        assert main(["--store", str(store_dir), "show", "web01", "--scope", "packages"]) == 1

    def test_export_unwritable_target(self, store_dir, tmp_path):
        target = tmp_path / "file"
        target.write_text("")

        assert main([
            "--store", str(store_dir), "export-autoinstall", "web01", "--target", str(target),
        ]) == 1
