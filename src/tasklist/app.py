"""Application state: one task list engine plus one theme preference.

This is the surface a presentation layer talks to. Every intent returns the
latest ``AppView`` and is also pushed to subscribers, so a UI can either use
the return value or re-render from a subscription.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path

from tasklist.config import TaskListConfig
from tasklist.engine import TaskListEngine
from tasklist.models import AppView, Filter, Task
from tasklist.store import FileStore, MemoryStore, PersistentStore
from tasklist.theme import ThemePreference
from tasklist.writer import SnapshotWriter, SyncWriter, WriteBehindWriter, WriteCallback

logger = logging.getLogger(__name__)

ViewListener = Callable[[AppView], None]


class TaskListApp:
    def __init__(
        self,
        store: PersistentStore,
        writer: SnapshotWriter | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.writer = writer if writer is not None else SyncWriter(store)
        self.engine = TaskListEngine(store, self.writer, clock=clock)
        self.theme = ThemePreference(store, self.writer)
        self._listeners: list[ViewListener] = []

    @classmethod
    def from_config(
        cls,
        config: TaskListConfig,
        *,
        data_dir: str | Path | None = None,
        on_written: WriteCallback | None = None,
    ) -> TaskListApp:
        """Build an app with the store and writer described by ``config``."""
        storage = config.storage
        store: PersistentStore
        if storage.backend == "memory":
            store = MemoryStore()
        else:
            store = FileStore(data_dir if data_dir is not None else storage.directory)

        writer: SnapshotWriter
        if storage.write_behind:
            writer = WriteBehindWriter(store, on_written=on_written)
        else:
            writer = SyncWriter(store, on_written=on_written)

        logger.debug("App created backend=%s write_behind=%s", storage.backend, storage.write_behind)
        return cls(store, writer)

    # ---- lifecycle ----

    def load(self) -> AppView:
        self.engine.load()
        self.theme.load()
        return self._emit()

    def flush(self) -> None:
        """Block until every pending write has reached the store."""
        self.writer.flush()

    def close(self) -> None:
        self.writer.close()

    def __enter__(self) -> TaskListApp:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ---- subscriptions ----

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Call ``listener`` with the new view after every intent."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> AppView:
        current = self.view()
        for listener in list(self._listeners):
            listener(current)
        return current

    # ---- intents ----

    def add(self, text: str) -> AppView:
        self.engine.add(text)
        return self._emit()

    def toggle_complete(self, task_id: str) -> AppView:
        self.engine.toggle_complete(task_id)
        return self._emit()

    def delete(self, task_id: str) -> AppView:
        self.engine.delete(task_id)
        return self._emit()

    def reorder(self, sequence: Iterable[Task | str]) -> AppView:
        self.engine.reorder(sequence)
        return self._emit()

    def reorder_visible(self, sequence: Iterable[Task | str]) -> AppView:
        self.engine.reorder_visible(sequence)
        return self._emit()

    def move(self, task_id: str, position: int) -> AppView:
        self.engine.move(task_id, position)
        return self._emit()

    def clear_completed(self) -> AppView:
        self.engine.clear_completed()
        return self._emit()

    def set_filter(self, value: Filter | str) -> AppView:
        self.engine.set_filter(value)
        return self._emit()

    def toggle_theme(self) -> AppView:
        self.theme.toggle()
        return self._emit()

    def view(self) -> AppView:
        return AppView(**dict(self.engine.view()), is_dark=self.theme.is_dark)
