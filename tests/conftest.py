"""Shared fixtures for tasklist tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from tasklist.engine import TaskListEngine
from tasklist.store import MemoryStore

from tests.fakes import FakeClock, RecordingStore


@pytest.fixture
def temp_project(tmp_path: Path) -> Iterator[Path]:
    """Run the test from inside an empty project directory."""
    original = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def engine(recording_store: RecordingStore, clock: FakeClock) -> TaskListEngine:
    """Engine over a recording store with synchronous writes."""
    return TaskListEngine(recording_store, clock=clock)
