"""Data models for tasklist.

Tasks are immutable values; the engine replaces a task with a modified copy
instead of mutating it. The stored shape of a task is exactly
``{"id": ..., "text": ..., "completed": ...}``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class Filter(str, Enum):
    """View selector for the task list."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: Filter | str) -> Filter:
        """Accept a Filter or its string value."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    def matches(self, task: Task) -> bool:
        if self is Filter.ACTIVE:
            return not task.completed
        if self is Filter.COMPLETED:
            return task.completed
        return True


class Task(BaseModel):
    """A single task."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: str
    text: str
    completed: bool = False

    @field_validator("id")
    @classmethod
    def _id_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("task id must not be empty")
        return value

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("task text must not be blank")
        return value

    def toggled(self) -> Task:
        """Return a copy with ``completed`` flipped."""
        return self.model_copy(update={"completed": not self.completed})


TaskListAdapter = TypeAdapter(list[Task])


def dump_tasks(tasks: list[Task] | tuple[Task, ...]) -> str:
    """Serialise tasks to the stored JSON array."""
    return TaskListAdapter.dump_json(list(tasks)).decode("utf-8")


class TaskListView(BaseModel):
    """Read-only projection of the task list for one filter."""

    model_config = ConfigDict(frozen=True)

    tasks: list[Task] = Field(default_factory=list)
    active_count: int = 0
    filter: Filter = Filter.ALL
    total: int = 0
    has_completed: bool = False

    @property
    def items_left(self) -> str:
        """Footer label, e.g. ``"1 item left"`` or ``"3 items left"``."""
        noun = "item" if self.active_count == 1 else "items"
        return f"{self.active_count} {noun} left"


class AppView(TaskListView):
    """TaskListView plus the theme flag, as handed to a presentation layer."""

    is_dark: bool = False
