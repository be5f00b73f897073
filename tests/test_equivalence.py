"""
Both backends must give the same answers for the same sequence of calls.
"""
from datetime import date

import pytest

from moodjournal.storage.blob_store import BlobMoodStore
from moodjournal.storage.kv import InMemoryKeyValueStore
from moodjournal.storage.sql_store import SQLMoodStore

pytestmark = pytest.mark.integration


def _scenario(store):
    store.create_entry({"timestamp": "2025-11-28T09:00:00Z", "mood_names": ["Calmo"], "tag_names": ["Casa"]})
    second = store.create_entry({
        "timestamp": "2025-11-29T23:30:00-03:00",
        "mood_names": ["Estressado", "Preocupado", "Inexistente"],
        "tag_names": ["Trabalho", "Café"],
        "notes": "Prazo",
    })
    store.create_entry({"timestamp": "2025-11-30T10:00:00Z", "mood_names": ["Feliz"], "tag_names": ["Casa"]})
    store.create_entry({"timestamp": "2025-11-30T10:00:00Z", "mood_names": ["Calmo", "Feliz"]})
    gone = store.create_entry({"timestamp": "2025-11-30T12:00:00Z", "mood_names": ["Triste"]})

    store.update_entry(second.id, {"tag_names": ["Café", "Trabalho"], "notes": None})
    store.delete_entry(gone.id)
    store.get_or_create_tag("Leitura", "#336699")
    store.update_configuration({"theme": "light", "reminder_time": "21:15"})

    return {
        "entries": [e.model_dump() for e in store.get_all_entries()],
        "by_date": [e.id for e in store.get_entries_by_date("2025-11-30")],
        "stats": store.get_stats().model_dump(),
        "distribution": store.get_mood_distribution(),
        "daily": store.get_daily_counts(),
        "daily_range": store.get_daily_counts(date(2025, 11, 29), date(2025, 11, 29)),
        "tags": [t.model_dump() for t in store.list_tags()],
        "moods": [m.model_dump() for m in store.list_moods()],
        "configuration": store.get_configuration().model_dump(),
        "next_id": store.create_entry({"mood_names": ["Bravo"]}).id,
    }


def test_backends_agree():
    with SQLMoodStore("sqlite://") as sql, BlobMoodStore(InMemoryKeyValueStore()) as blob:
        sql_result = _scenario(sql)
        blob_result = _scenario(blob)

    assert sql_result == blob_result

    assert sql_result["by_date"] == [4, 3, 2]
    assert sql_result["stats"] == {"total": 4, "most_common_mood": "Calmo"}
    assert sql_result["daily"] == {"2025-11-28": 1, "2025-11-30": 3}
    assert sql_result["daily_range"] == {}
    assert sql_result["entries"][2]["tag_names"] == ["Café", "Trabalho"]
    assert sql_result["entries"][2]["notes"] is None
    assert sql_result["next_id"] == 6
