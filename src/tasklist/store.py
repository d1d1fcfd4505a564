"""Key/value stores for persisted state.

The core only needs two capabilities: read a string blob by key and write a
string blob by key. Stores are last-write-wins per key and make no promise
across keys.

- ``get`` returns ``None`` for a missing key and raises ``LoadError`` when the
  backing medium exists but cannot be read.
- ``set`` returns ``False`` on failure instead of raising.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from tasklist.errors import LoadError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class PersistentStore(Protocol):
    """Durable string storage by key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> bool: ...


class MemoryStore:
    """Process-local store. Used by tests and the ``memory`` backend."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        with self._lock:
            self._data[key] = value
        return True


class FileStore:
    """
    One file per key under a directory.

    Writes go to a temp file in the same directory, are fsynced, then renamed
    over the target, so a reader sees either the old or the new blob.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        name = _UNSAFE_CHARS.sub("_", key.lstrip("@")) or "_"
        return self._root / f"{name}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> bool:
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=self._root)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError:
            logger.exception("FileStore write failed key=%s path=%s", key, path)
            return False
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
        logger.debug("FileStore wrote key=%s bytes=%d", key, len(value))
        return True
