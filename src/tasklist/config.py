"""Configuration models for tasklist."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Configuration for persisted state."""

    backend: Literal["file", "memory"] = "file"
    directory: str = ".tasklist/data"
    write_behind: bool = True


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    enabled: bool = True
    directory: str = ".tasklist"
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "DEBUG"


class TaskListConfig(BaseModel):
    """Main configuration for tasklist."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TaskListConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)


# Default config directory
TASKLIST_DIR = Path(".tasklist")
CONFIG_FILE = TASKLIST_DIR / "config.json"

# Store keys
TODOS_KEY = "@todos"
THEME_KEY = "@theme"
