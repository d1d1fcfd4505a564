"""Exception hierarchy for tasklist."""

from __future__ import annotations


class TaskListError(Exception):
    """Base class for tasklist errors."""


class StoreError(TaskListError):
    """A persistent store could not be used."""


class LoadError(StoreError):
    """Stored state could not be read or did not have the expected shape."""


class SaveError(StoreError):
    """A snapshot could not be written to the store."""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        self.reason = reason
        message = f"failed to save {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
