"""Tests for tasklist.logging_setup module."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from tasklist.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Drop the handlers setup_logging added and restore the root level."""
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    created: list[logging.Handler] = []
    try:
        yield
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                created.append(h)
        for h in created:
            h.close()
        root.setLevel(level)
        logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


class TestConsoleNoiseFilter:
    """Tests for the console filter."""

    def test_allows_own_logs(self) -> None:
        """Test tasklist records pass at any level."""
        f = _ConsoleNoiseFilter()
        assert f.filter(_record("tasklist.engine", logging.DEBUG))
        assert f.filter(_record("tasklist", logging.INFO))

    def test_limits_third_party(self) -> None:
        """Test other loggers need ERROR or above."""
        f = _ConsoleNoiseFilter()
        assert not f.filter(_record("urllib3", logging.WARNING))
        assert not f.filter(_record("py.warnings", logging.WARNING))
        assert f.filter(_record("urllib3", logging.ERROR))

    def test_prefix_match_is_exact(self) -> None:
        """Test a lookalike logger name is treated as third party."""
        assert not _ConsoleNoiseFilter().filter(_record("tasklistx", logging.INFO))


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_creates_log_file(self, tmp_path: Path, restore_root_logger: None) -> None:
        """Test the log directory and file are created and written."""
        log_file = setup_logging(log_dir=tmp_path / "logs")

        logging.getLogger("tasklist.test").debug("hello file")
        for h in logging.getLogger().handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "tasklist.log"
        assert "hello file" in log_file.read_text()

    def test_replaces_handlers(self, tmp_path: Path, restore_root_logger: None) -> None:
        """Test calling twice does not duplicate handlers."""
        setup_logging(log_dir=tmp_path)
        setup_logging(log_dir=tmp_path)

        assert len(logging.getLogger().handlers) == 2

    def test_console_level(self, tmp_path: Path, restore_root_logger: None) -> None:
        """Test the console handler honours the requested level."""
        setup_logging(log_dir=tmp_path, console_level="ERROR")

        stream_handlers = [
            h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].level == logging.ERROR
