import json
import sqlite3

import pytest

from gentle_diary.errors import StorageWriteFailure
from gentle_diary.schemas import Entry, Mood
from gentle_diary.storage import EntryStorage


def _entry(entry_id: str, mood: Mood = Mood.HAPPY, reflection: str = "A calm walk") -> Entry:
    return Entry(
        id=entry_id,
        date="2026-10-19",
        mood=mood,
        reflection=reflection,
        encouragement="Keep going.",
    )


def test_missing_key_loads_empty(storage):
    assert storage.load_all() == []


def test_save_then_load_round_trip(storage):
    entries = [_entry("2"), _entry("1", Mood.OVERWHELMED, "Café visit, ünïcode")]
    storage.save_all(entries)
    assert storage.load_all() == entries


def test_stored_format_is_plain_json_array(storage, kv_store):
    storage.save_all([_entry("1")])
    data = json.loads(kv_store.get("test_entries"))
    assert data == [
        {
            "id": "1",
            "date": "2026-10-19",
            "mood": "happy",
            "reflection": "A calm walk",
            "encouragement": "Keep going.",
        }
    ]


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '{"id": "1"}',
        '[{"id": "1"}]',
        '[{"id": "1", "date": "2026-10-19", "mood": "ecstatic", "reflection": "x", "encouragement": "y"}]',
        '[{"id": "1", "date": "2026-10-19", "mood": "happy", "reflection": "   ", "encouragement": "y"}]',
        '[{"id": "1", "date": "yesterday", "mood": "happy", "reflection": "x", "encouragement": "y"}]',
    ],
)
def test_corrupt_value_loads_empty(storage, kv_store, raw, caplog):
    kv_store.set("test_entries", raw)
    with caplog.at_level("WARNING"):
        assert storage.load_all() == []
    assert "unreadable" in caplog.text


def test_keys_are_independent(kv_store):
    first = EntryStorage(kv_store, "a")
    second = EntryStorage(kv_store, "b")
    first.save_all([_entry("1")])
    assert second.load_all() == []


def test_write_error_raises_storage_failure(storage, kv_store):
    kv_store.close()
    with pytest.raises(StorageWriteFailure):
        storage.save_all([_entry("1")])


def test_read_error_loads_empty(storage, kv_store):
    kv_store.close()
    assert storage.load_all() == []


def test_kv_store_upsert(kv_store):
    assert kv_store.get("k") is None
    kv_store.set("k", "one")
    kv_store.set("k", "two")
    assert kv_store.get("k") == "two"


def test_closed_connection_raises_sqlite_error(kv_store):
    kv_store.close()
    with pytest.raises(sqlite3.Error):
        kv_store.set("k", "v")
