"""Task list engine: ordered tasks, the active filter and every mutation.

Each mutation updates the in-memory list first and then hands a full snapshot
of the list to the writer. Intents that change nothing (blank text, unknown
id, a reorder that is not a permutation of the current ids) return the
unchanged view and do not write.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Sequence

from pydantic import ValidationError
from pydantic_core import from_json

from tasklist.config import TODOS_KEY
from tasklist.models import Filter, Task, TaskListView, dump_tasks
from tasklist.store import PersistentStore
from tasklist.writer import SnapshotWriter, SyncWriter

logger = logging.getLogger(__name__)


class TaskListEngine:
    def __init__(
        self,
        store: PersistentStore,
        writer: SnapshotWriter | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._writer = writer if writer is not None else SyncWriter(store)
        self._clock = clock

        self._tasks: list[Task] = []
        self._filter = Filter.ALL

    # ---- state ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Full, unfiltered list in display order."""
        return tuple(self._tasks)

    @property
    def filter(self) -> Filter:
        return self._filter

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # ---- loading / saving ----

    def load(self) -> TaskListView:
        """
        Replace in-memory state with what the store holds.

        Never raises: a store that cannot be read or a payload that is not a
        JSON array of tasks leaves the list empty. Individual entries that are
        malformed, blank or reuse an earlier id are dropped.
        """
        self._tasks = []

        try:
            raw = self._store.get(TODOS_KEY)
        except Exception:
            logger.warning("Could not read %s; starting with an empty list.", TODOS_KEY, exc_info=True)
            return self.view()

        if raw is None:
            logger.debug("No stored tasks under %s.", TODOS_KEY)
            return self.view()

        try:
            data = from_json(raw)
        except (ValueError, RecursionError):
            logger.warning("Stored %s is not valid JSON; starting with an empty list.", TODOS_KEY)
            return self.view()

        if not isinstance(data, list):
            logger.warning(
                "Stored %s is a %s, expected a list; starting with an empty list.",
                TODOS_KEY,
                type(data).__name__,
            )
            return self.view()

        seen: set[str] = set()
        for index, item in enumerate(data):
            try:
                task = Task.model_validate(item)
            except ValidationError as e:
                logger.warning("Dropping malformed task at index %d: %s", index, e.errors()[0]["msg"])
                continue
            if task.id in seen:
                logger.warning("Dropping task at index %d: duplicate id %s", index, task.id)
                continue
            seen.add(task.id)
            self._tasks.append(task)

        logger.info("Loaded %d task(s).", len(self._tasks))
        return self.view()

    def _persist(self) -> None:
        self._writer.submit(TODOS_KEY, dump_tasks(self._tasks))

    def _new_id(self) -> str:
        candidate = int(self._clock() * 1000)
        used = {task.id for task in self._tasks}
        while str(candidate) in used:
            candidate += 1
        return str(candidate)

    # ---- intents ----

    def add(self, text: str) -> TaskListView:
        text = (text or "").strip()
        if not text:
            logger.debug("Ignoring add with blank text.")
            return self.view()

        task = Task(id=self._new_id(), text=text)
        self._tasks.append(task)
        self._persist()
        logger.debug("Task added id=%s", task.id)
        return self.view()

    def toggle_complete(self, task_id: str) -> TaskListView:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                self._tasks[index] = task.toggled()
                self._persist()
                return self.view()

        logger.debug("Ignoring toggle for unknown id=%s", task_id)
        return self.view()

    def delete(self, task_id: str) -> TaskListView:
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            logger.debug("Ignoring delete for unknown id=%s", task_id)
            return self.view()

        self._tasks = remaining
        self._persist()
        return self.view()

    def reorder(self, sequence: Iterable[Task | str]) -> TaskListView:
        """
        Apply a full re-permutation of the current tasks.

        ``sequence`` may hold ids or Task objects; only ids are taken from it,
        so a reorder never changes a task's text or completion.
        """
        ids = _ids_of(sequence)
        current = [task.id for task in self._tasks]
        if not _is_permutation(ids, current):
            logger.debug("Ignoring reorder: ids do not match the current list.")
            return self.view()

        return self._apply_order(ids)

    def reorder_visible(self, sequence: Iterable[Task | str]) -> TaskListView:
        """
        Reorder only the tasks visible under the active filter.

        The visible tasks are written back into the slots they already occupy
        in the full list; hidden tasks keep their positions.
        """
        ids = _ids_of(sequence)
        slots = [i for i, task in enumerate(self._tasks) if self._filter.matches(task)]
        visible = [self._tasks[i].id for i in slots]
        if not _is_permutation(ids, visible):
            logger.debug("Ignoring reorder: ids do not match the visible list.")
            return self.view()

        order = [task.id for task in self._tasks]
        for slot, task_id in zip(slots, ids):
            order[slot] = task_id
        return self._apply_order(order)

    def move(self, task_id: str, position: int) -> TaskListView:
        """Move one task to a zero-based position in the full list (clamped)."""
        order = [task.id for task in self._tasks]
        if task_id not in order:
            logger.debug("Ignoring move for unknown id=%s", task_id)
            return self.view()

        order.remove(task_id)
        position = max(0, min(position, len(order)))
        order.insert(position, task_id)
        return self.reorder(order)

    def clear_completed(self) -> TaskListView:
        remaining = [task for task in self._tasks if not task.completed]
        if len(remaining) == len(self._tasks):
            return self.view()

        removed = len(self._tasks) - len(remaining)
        self._tasks = remaining
        self._persist()
        logger.debug("Cleared %d completed task(s).", removed)
        return self.view()

    def set_filter(self, value: Filter | str) -> TaskListView:
        self._filter = Filter.parse(value)
        return self.view()

    def _apply_order(self, ids: Sequence[str]) -> TaskListView:
        if list(ids) == [task.id for task in self._tasks]:
            return self.view()

        by_id = {task.id: task for task in self._tasks}
        self._tasks = [by_id[task_id] for task_id in ids]
        self._persist()
        return self.view()

    # ---- derived view ----

    def view(self) -> TaskListView:
        active = sum(1 for task in self._tasks if not task.completed)
        return TaskListView(
            tasks=[task for task in self._tasks if self._filter.matches(task)],
            active_count=active,
            filter=self._filter,
            total=len(self._tasks),
            has_completed=active < len(self._tasks),
        )


def _ids_of(sequence: Iterable[Task | str]) -> list[str]:
    return [item.id if isinstance(item, Task) else str(item) for item in sequence]


def _is_permutation(ids: Sequence[str], current: Sequence[str]) -> bool:
    return len(ids) == len(current) and len(set(ids)) == len(ids) and set(ids) == set(current)
