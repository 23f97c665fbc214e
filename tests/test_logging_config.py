"""Tests for logging setup and timing helpers."""
import logging

import pytest

from sysdesc.utils.logging_config import (
    get_log_level,
    setup_logging,
    timed,
    timed_section,
)


@pytest.fixture(autouse=True)
def restore_handlers():
    yield
    for name in ("sysdesc", "sysdesc.perf"):
        for handler in logging.getLogger(name).handlers:
            handler.close()
        logging.getLogger(name).handlers.clear()


class TestLoggingConfig:
    """Tests for setup_logging."""

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("SYSDESC_LOG_LEVEL", "warning")
        assert get_log_level() == logging.WARNING

        monkeypatch.setenv("SYSDESC_LOG_LEVEL", "nonsense")
        assert get_log_level() == logging.INFO

    def test_file_logging(self, tmp_path, monkeypatch):
        log_file = tmp_path / "logs" / "sysdesc.log"
        monkeypatch.setenv("SYSDESC_LOG_FILE", str(log_file))

        setup_logging()
        logging.getLogger("sysdesc.test").info("hello")

        assert log_file.exists()
        assert (tmp_path / "logs" / "sysdesc-perf.log").exists()
        assert "hello" in log_file.read_text()

    def test_console_only(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SYSDESC_LOG_FILE", str(tmp_path / "sysdesc.log"))

        setup_logging(level=logging.DEBUG, log_to_file=False)

        assert len(logging.getLogger("sysdesc").handlers) == 1
        assert not (tmp_path / "sysdesc.log").exists()


class TestTimed:
    """Tests for timing helpers."""

    def test_timed_success(self, caplog):
        @timed("double")
        def double(x):
            return x * 2

        with caplog.at_level(logging.DEBUG, logger="sysdesc.perf"):
            assert double(4) == 8

        assert "double" in caplog.text
        assert "OK" in caplog.text

    def test_timed_failure_reraises(self, caplog):
        @timed("broken")
        def broken():
            raise OSError("disk full")

        with caplog.at_level(logging.DEBUG, logger="sysdesc.perf"):
            with pytest.raises(OSError):
                broken()

        assert "FAIL: disk full" in caplog.text

    def test_timed_section_extra(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="sysdesc.perf"):
            with timed_section("copy_files", scope="unmanaged_files"):
                pass

        assert "scope=unmanaged_files" in caplog.text
