from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from moodjournal.core.exceptions import StorageError
from moodjournal.schemas.entry import MoodEntryCreate, MoodEntryUpdate

pytestmark = pytest.mark.integration


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def test_fresh_store_is_empty(store):
    assert store.get_all_entries() == []
    assert store.delete_all_entries() is False
    assert store.get_entry(1) is None


def test_create_round_trip(store):
    created = store.create_entry(MoodEntryCreate(
        timestamp=_utc(2025, 11, 30, 10, 0),
        mood_names=["Feliz", "Calmo"],
        tag_names=["Trabalho", "Hobby"],
        notes="Dia de lançamento",
    ))

    fetched = store.get_entry(created.id)
    assert fetched == created
    assert fetched.mood_names == ["Feliz", "Calmo"]
    assert fetched.tag_names == ["Trabalho", "Hobby"]
    assert fetched.notes == "Dia de lançamento"
    assert fetched.timestamp == _utc(2025, 11, 30, 10, 0)


def test_create_accepts_plain_mapping(store):
    created = store.create_entry({"mood_names": ["Triste"], "tag_names": [], "timestamp": "2025-11-27"})

    assert created.mood_names == ["Triste"]
    assert created.timestamp == _utc(2025, 11, 27)
    assert created.notes is None


def test_timestamp_defaults_to_now(store):
    before = datetime.now(timezone.utc)
    created = store.create_entry({"mood_names": ["Calmo"]})
    after = datetime.now(timezone.utc)

    assert before <= created.timestamp <= after
    assert created.timestamp.tzinfo is not None


def test_unknown_moods_are_dropped(store):
    created = store.create_entry({"mood_names": ["Alegre", "Triste"], "tag_names": ["Casa"]})

    assert created.mood_names == ["Triste"]
    assert store.get_entry(created.id).mood_names == ["Triste"]


def test_all_moods_unknown_still_writes(store):
    created = store.create_entry({"mood_names": ["Cansado"], "notes": "long day"})

    fetched = store.get_entry(created.id)
    assert fetched.mood_names == []
    assert fetched.notes == "long day"


def test_duplicate_input_names_are_collapsed(store):
    created = store.create_entry({
        "mood_names": ["Feliz", "Feliz", " Calmo ", "Calmo"],
        "tag_names": ["Casa", "Casa", "  ", "Rua", " Rua"],
    })

    # " Calmo " is not a catalogue name, so it is dropped rather than trimmed
    assert created.mood_names == ["Feliz", "Calmo"]
    assert created.tag_names == ["Casa", "Rua", " Rua"]


def test_many_moods_and_tags_are_not_duplicated(store):
    """Three moods times three tags must not fan out into repeated names."""
    store.create_entry({
        "timestamp": "2025-11-26T12:00:00Z",
        "mood_names": ["Triste", "Desapontado", "Frustrado"],
        "tag_names": ["Trabalho", "Família", "Academia"],
    })
    store.create_entry({"mood_names": ["Feliz"], "tag_names": ["Família"]})

    for entry in store.get_all_entries():
        assert len(entry.mood_names) == len(set(entry.mood_names))
        assert len(entry.tag_names) == len(set(entry.tag_names))

    oldest = store.get_all_entries()[-1]
    assert oldest.mood_names == ["Triste", "Desapontado", "Frustrado"]
    assert oldest.tag_names == ["Trabalho", "Família", "Academia"]


def test_tags_are_case_sensitive(store):
    created = store.create_entry({"mood_names": ["Feliz"], "tag_names": ["casa", "Casa"]})

    assert created.tag_names == ["casa", "Casa"]
    assert sorted(tag.name for tag in store.list_tags()) == ["Casa", "casa"]


def test_get_all_is_newest_first(store):
    first = store.create_entry({"timestamp": "2025-11-25T10:00:00Z", "mood_names": ["Feliz"]})
    third = store.create_entry({"timestamp": "2025-11-30T10:00:00Z", "mood_names": ["Calmo"]})
    second = store.create_entry({"timestamp": "2025-11-28T18:00:00Z", "mood_names": ["Triste"]})
    same_time = store.create_entry({"timestamp": "2025-11-30T10:00:00Z", "mood_names": ["Bravo"]})

    ids = [entry.id for entry in store.get_all_entries()]
    assert ids == [same_time.id, third.id, second.id, first.id]


def test_create_then_read_sees_the_write(store):
    created = store.create_entry({"mood_names": ["Feliz"]})
    assert [entry.id for entry in store.get_all_entries()] == [created.id]


def test_get_by_date_day_boundary(store):
    late = store.create_entry({"timestamp": "2025-11-29T23:59:59Z", "mood_names": ["Calmo"]})
    early = store.create_entry({"timestamp": "2025-11-30T00:00:00Z", "mood_names": ["Feliz"]})

    assert [e.id for e in store.get_entries_by_date("2025-11-29")] == [late.id]
    assert [e.id for e in store.get_entries_by_date("2025-11-30")] == [early.id]
    assert store.get_entries_by_date("2025-12-01") == []


def test_get_by_date_normalizes_offsets_to_utc(store):
    # 01:30 at UTC+3 is 22:30 UTC on the previous day.
    entry = store.create_entry({"timestamp": "2025-11-30T01:30:00+03:00", "mood_names": ["Calmo"]})

    assert entry.timestamp == _utc(2025, 11, 29, 22, 30)
    assert [e.id for e in store.get_entries_by_date(datetime(2025, 11, 29).date())] == [entry.id]
    assert store.get_entries_by_date("2025-11-30") == []


def test_update_empty_patch_is_noop(store):
    created = store.create_entry({"mood_names": ["Feliz"], "notes": "keep"})

    assert store.update_entry(created.id, MoodEntryUpdate()) is False
    assert store.get_entry(created.id).notes == "keep"


def test_update_unknown_entry_returns_false(store):
    assert store.update_entry(999, {"notes": "x"}) is False
    assert store.update_entry(999, {"mood_names": ["Feliz"]}) is False


def test_update_notes_absent_versus_cleared(store):
    created = store.create_entry({"mood_names": ["Feliz"], "notes": "original"})

    assert store.update_entry(created.id, {"mood_names": ["Calmo"]}) is True
    assert store.get_entry(created.id).notes == "original"

    assert store.update_entry(created.id, {"notes": None}) is True
    assert store.get_entry(created.id).notes is None


def test_update_replaces_mood_and_tag_sets(store):
    created = store.create_entry({
        "mood_names": ["Feliz", "Calmo"],
        "tag_names": ["Trabalho", "Hobby"],
    })

    assert store.update_entry(created.id, {"mood_names": ["Triste"], "tag_names": ["Família"]}) is True
    updated = store.get_entry(created.id)
    assert updated.mood_names == ["Triste"]
    assert updated.tag_names == ["Família"]

    # Same set again is idempotent
    assert store.update_entry(created.id, {"mood_names": ["Triste"]}) is True
    assert store.get_entry(created.id).mood_names == ["Triste"]

    # Old tags remain in the vocabulary
    assert {"Trabalho", "Hobby", "Família"} <= {tag.name for tag in store.list_tags()}


def test_update_can_clear_tags(store):
    created = store.create_entry({"mood_names": ["Feliz"], "tag_names": ["Casa"]})

    assert store.update_entry(created.id, {"tag_names": []}) is True
    assert store.get_entry(created.id).tag_names == []


def test_delete_entry(store):
    keep = store.create_entry({"mood_names": ["Calmo"], "tag_names": ["Casa"]})
    gone = store.create_entry({"mood_names": ["Feliz"], "tag_names": ["Casa"]})

    assert store.delete_entry(gone.id) is True
    assert store.get_entry(gone.id) is None
    assert store.delete_entry(gone.id) is False
    assert [e.id for e in store.get_all_entries()] == [keep.id]

    # Catalogue rows survive and can be linked again
    again = store.create_entry({"mood_names": ["Feliz"], "tag_names": ["Casa"]})
    assert again.id != gone.id
    assert store.get_entry(again.id).tag_names == ["Casa"]
    assert [tag.name for tag in store.list_tags()] == ["Casa"]
    assert len(store.list_moods()) == 9


def test_delete_all_entries_keeps_tags(store):
    store.create_entry({"mood_names": ["Feliz"], "tag_names": ["Casa"]})
    store.create_entry({"mood_names": ["Triste"], "tag_names": ["Rua"]})

    assert store.delete_all_entries() is True
    assert store.get_all_entries() == []
    assert store.delete_all_entries() is False
    assert [tag.name for tag in store.list_tags()] == ["Casa", "Rua"]


def test_ids_are_not_reused(store):
    first = store.create_entry({"mood_names": ["Feliz"]})
    store.delete_all_entries()
    second = store.create_entry({"mood_names": ["Feliz"]})

    assert second.id > first.id


@pytest.mark.unit
def test_create_requires_a_mood_name():
    with pytest.raises(ValidationError):
        MoodEntryCreate(mood_names=[])


@pytest.mark.unit
def test_update_tracks_supplied_fields():
    assert MoodEntryUpdate().provided() == {}
    assert MoodEntryUpdate(notes=None).provided() == {"notes": None}
    assert MoodEntryUpdate(mood_names=None).provided() == {}
    assert MoodEntryUpdate(tag_names=["a", "a", " "]).provided() == {"tag_names": ["a"]}


@pytest.mark.unit
def test_single_mood_shorthand_in_update():
    assert MoodEntryUpdate(mood="Triste").provided() == {"mood_names": ["Triste"]}
    assert MoodEntryUpdate(mood="Triste", mood_names=["Calmo"]).provided() == {"mood_names": ["Calmo"]}
    assert MoodEntryUpdate(mood=" ").provided() == {}
    assert MoodEntryUpdate(mood=None).provided() == {}


def test_update_with_single_mood(store):
    created = store.create_entry({"mood_names": ["Feliz", "Calmo"], "notes": "kept"})

    assert store.update_entry(created.id, {"mood": "Triste"}) is True
    updated = store.get_entry(created.id)
    assert updated.mood_names == ["Triste"]
    assert updated.notes == "kept"

    assert store.update_entry(created.id, {"mood": "Bravo", "mood_names": ["Calmo"]}) is True
    assert store.get_entry(created.id).mood_names == ["Calmo"]
    assert store.update_entry(created.id, {"mood": None}) is False


def test_unencodable_notes_are_a_storage_error(store):
    kept = store.create_entry({"mood_names": ["Calmo"], "notes": "ok"})

    with pytest.raises(StorageError):
        store.create_entry({"mood_names": ["Feliz"], "tag_names": ["Novo"], "notes": "bad \ud800"})
    with pytest.raises(StorageError):
        store.update_entry(kept.id, {"notes": "bad \udfff"})

    assert store.get_all_entries() == [kept]
    assert store.list_tags() == []
