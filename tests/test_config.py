"""Tests for tasklist.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasklist.config import (
    CONFIG_FILE,
    TASKLIST_DIR,
    THEME_KEY,
    TODOS_KEY,
    LoggingConfig,
    StorageConfig,
    TaskListConfig,
)


class TestStorageConfig:
    """Tests for StorageConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = StorageConfig()
        assert config.backend == "file"
        assert config.directory == ".tasklist/data"
        assert config.write_behind is True

    def test_invalid_backend(self) -> None:
        """Test that unknown backends are rejected."""
        with pytest.raises(Exception):
            StorageConfig(backend="redis")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = LoggingConfig()
        assert config.enabled is True
        assert config.directory == ".tasklist"
        assert config.console_level == "WARNING"
        assert config.file_level == "DEBUG"

    def test_invalid_level(self) -> None:
        """Test that unknown levels are rejected."""
        with pytest.raises(Exception):
            LoggingConfig(console_level="LOUD")  # type: ignore[arg-type]


class TestTaskListConfig:
    """Tests for TaskListConfig model."""

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Test loading returns defaults when file doesn't exist."""
        config = TaskListConfig.load(tmp_path / "config.json")
        assert config == TaskListConfig()

    def test_load_partial_file(self, tmp_path: Path) -> None:
        """Test missing sections fall back to defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"storage": {"write_behind": False}}))

        config = TaskListConfig.load(path)

        assert config.storage.write_behind is False
        assert config.storage.backend == "file"
        assert config.logging.enabled is True

    def test_load_invalid_file(self, tmp_path: Path) -> None:
        """Test invalid values raise a ValueError."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"storage": {"backend": "nope"}}))

        with pytest.raises(ValueError):
            TaskListConfig.load(path)

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """Test saving creates the directory and round-trips."""
        path = tmp_path / "nested" / "config.json"
        config = TaskListConfig(storage=StorageConfig(backend="memory"))

        config.save(path)

        assert path.exists()
        assert TaskListConfig.load(path).storage.backend == "memory"

    def test_default_path(self, temp_project: Path) -> None:
        """Test load/save use .tasklist/config.json by default."""
        TaskListConfig(logging=LoggingConfig(enabled=False)).save()

        assert (temp_project / ".tasklist" / "config.json").exists()
        assert TaskListConfig.load().logging.enabled is False


class TestConstants:
    """Tests for module constants."""

    def test_paths(self) -> None:
        """Test default paths."""
        assert TASKLIST_DIR == Path(".tasklist")
        assert CONFIG_FILE == Path(".tasklist/config.json")

    def test_store_keys(self) -> None:
        """Test the persisted keys."""
        assert TODOS_KEY == "@todos"
        assert THEME_KEY == "@theme"
