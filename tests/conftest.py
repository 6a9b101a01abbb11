from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from gentle_diary.storage import EntryStorage, SQLiteKeyValueStore


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class SteppingClock:
    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


@pytest.fixture
def kv_store(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "diary.db"))
    yield store
    store.close()


@pytest.fixture
def storage(kv_store):
    return EntryStorage(kv_store, "test_entries")


@pytest.fixture
def clock():
    return SteppingClock(datetime(2026, 10, 19, 9, 30))
