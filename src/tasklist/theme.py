"""Light/dark theme preference, persisted under its own key."""

from __future__ import annotations

import logging

from tasklist.config import THEME_KEY
from tasklist.store import PersistentStore
from tasklist.writer import SnapshotWriter, SyncWriter

logger = logging.getLogger(__name__)

DARK = "dark"
LIGHT = "light"


class ThemePreference:
    def __init__(self, store: PersistentStore, writer: SnapshotWriter | None = None) -> None:
        self._store = store
        self._writer = writer if writer is not None else SyncWriter(store)
        self._is_dark = False

    @property
    def is_dark(self) -> bool:
        return self._is_dark

    @property
    def name(self) -> str:
        return DARK if self._is_dark else LIGHT

    def load(self) -> bool:
        """Read the stored theme. Anything other than "dark" means light."""
        try:
            raw = self._store.get(THEME_KEY)
        except Exception:
            logger.warning("Could not read %s; using light theme.", THEME_KEY, exc_info=True)
            raw = None

        value = (raw or "").strip()
        if value and value not in (DARK, LIGHT):
            logger.warning("Unrecognised stored theme %r; using light theme.", value)

        self._is_dark = value == DARK
        return self._is_dark

    def toggle(self) -> bool:
        self._is_dark = not self._is_dark
        self._writer.submit(THEME_KEY, self.name)
        logger.debug("Theme set to %s", self.name)
        return self._is_dark
