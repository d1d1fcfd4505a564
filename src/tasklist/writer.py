"""Write-behind persistence.

Callers hand over full snapshots and carry on; a worker thread writes them to
the store in submission order. Because every snapshot is complete, a snapshot
that is still queued when a newer one for the same key arrives is skipped.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from typing import Protocol

from tasklist.errors import SaveError
from tasklist.store import PersistentStore

logger = logging.getLogger(__name__)

WriteCallback = Callable[[str, bool], None]


class SnapshotWriter(Protocol):
    def submit(self, key: str, value: str) -> None: ...
    def flush(self) -> None: ...
    def close(self) -> None: ...


def _write(store: PersistentStore, key: str, value: str, on_written: WriteCallback | None) -> bool:
    reason = "store rejected the write"
    try:
        ok = bool(store.set(key, value))
    except Exception as e:
        reason = repr(e)
        ok = False

    if not ok:
        # In-memory state has already moved on; nothing to roll back.
        logger.error("%s", SaveError(key, reason))

    if on_written is not None:
        try:
            on_written(key, ok)
        except Exception:
            logger.exception("on_written callback failed for key=%s", key)
    return ok


class SyncWriter:
    """Writes each snapshot inline. Used when write-behind is disabled."""

    def __init__(self, store: PersistentStore, on_written: WriteCallback | None = None) -> None:
        self._store = store
        self._on_written = on_written

    def submit(self, key: str, value: str) -> None:
        _write(self._store, key, value, self._on_written)

    def flush(self) -> None:
        return

    def close(self) -> None:
        return


class WriteBehindWriter:
    """
    Ordered, coalescing background writer.

    Notes:
    - ``on_written(key, ok)`` runs on the worker thread.
    - ``flush()`` blocks until everything submitted so far has been handled.
    - After ``close()`` further snapshots are written synchronously.
    """

    def __init__(self, store: PersistentStore, on_written: WriteCallback | None = None) -> None:
        self._store = store
        self._on_written = on_written

        self._queue: queue.Queue[tuple[str, int] | None] = queue.Queue()
        self._lock = threading.Lock()
        self._pending: dict[str, tuple[int, str]] = {}
        self._seq = 0
        self._closed = False

        self._worker = threading.Thread(target=self._run, name="tasklist-writer", daemon=True)
        self._worker.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, key: str, value: str) -> None:
        if self._closed:
            _write(self._store, key, value, self._on_written)
            return

        with self._lock:
            self._seq += 1
            seq = self._seq
            self._pending[key] = (seq, value)
        self._queue.put((key, seq))

    def flush(self) -> None:
        self._queue.join()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        self._queue.put(None)
        self._queue.join()
        self._worker.join(timeout=2.0)
        logger.debug("Writer stopped.")

    def _take(self, key: str, seq: int) -> str | None:
        """Return the value for (key, seq) unless a newer snapshot replaced it."""
        with self._lock:
            latest = self._pending.get(key)
            if latest is None or latest[0] != seq:
                return None
            del self._pending[key]
            return latest[1]

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    return

                key, seq = item
                value = self._take(key, seq)
                if value is None:
                    logger.debug("Skipping superseded snapshot key=%s seq=%d", key, seq)
                    continue

                _write(self._store, key, value, self._on_written)
            finally:
                self._queue.task_done()
