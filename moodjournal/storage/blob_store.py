"""
Flat-file fallback backend.

The whole dataset is one JSON document under a fixed key in a key-value
store. It is loaded once by ``ensure_schema`` and rewritten in full on
every mutation. Mutations work on a copy that only replaces the in-memory
document once the write succeeded, so a failed save changes nothing.

Document layout::

    {
        "entries": [{"id", "timestamp", "notes", "mood_names", "tag_names"}],
        "moods": [{"id", "name", "color", "icon"}],
        "tags": [{"id", "name", "color"}],
        "configuration": {"reminder_enabled", "reminder_time", "theme"},
        "sequences": {"entries": last id, "tags": last id}
    }
"""
import copy
import json
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from moodjournal.core.config import DEFAULT_BLOB_KEY
from moodjournal.core.exceptions import InitializationError, StorageError
from moodjournal.core.logging_config import log_error, log_info
from moodjournal.core.time_utils import day_bounds, from_iso, to_iso, utc_now
from moodjournal.models import DEFAULT_TAG_COLOR, MOOD_CATALOGUE
from moodjournal.models.configuration import DEFAULT_REMINDER_TIME, DEFAULT_THEME
from moodjournal.schemas.configuration import ConfigurationRead, ConfigurationUpdate
from moodjournal.schemas.entry import MoodEntryCreate, MoodEntryRead, MoodEntryUpdate
from moodjournal.schemas.mood import MoodRead
from moodjournal.schemas.stats import MoodStats
from moodjournal.schemas.tag import TagRead, require_tag_name
from moodjournal.services.aggregation import compute_daily_counts, compute_mood_distribution, compute_stats
from moodjournal.storage.base import Day, MoodStore, as_schema


def _default_configuration() -> Dict[str, Any]:
    return {
        "reminder_enabled": True,
        "reminder_time": DEFAULT_REMINDER_TIME,
        "theme": DEFAULT_THEME.value,
    }


def _entry_from_document(item: Dict[str, Any]) -> MoodEntryRead:
    return MoodEntryRead(
        id=item["id"],
        timestamp=from_iso(item["timestamp"]),
        notes=item.get("notes"),
        mood_names=item.get("mood_names", []),
        tag_names=item.get("tag_names", []),
    )


def _newest_first(entries: List[MoodEntryRead]) -> List[MoodEntryRead]:
    return sorted(entries, key=lambda e: (e.timestamp, e.id), reverse=True)


class BlobMoodStore(MoodStore):
    """Store that keeps the dataset in memory and persists it as one blob."""

    backend_name = "blob"

    def __init__(self, kv_store, key: str = DEFAULT_BLOB_KEY):
        self.kv_store = kv_store
        self.key = key
        self._data: Optional[Dict[str, Any]] = None

    # Schema / lifetime
    def ensure_schema(self) -> None:
        try:
            raw = self.kv_store.get(self.key)
            document = json.loads(raw) if raw else {}
            if not isinstance(document, dict):
                raise ValueError("stored blob is not a JSON object")
            self._prepare(document)
            self._save(document)
        except (StorageError, ValueError, TypeError, KeyError) as exc:
            log_error(exc, key=self.key)
            self.kv_store.close()
            raise InitializationError(f"Failed to load stored data: {exc}") from exc

        self._data = document
        log_info("Blob store ready", key=self.key, entries=len(document["entries"]))

    def _prepare(self, document: Dict[str, Any]) -> None:
        """Fill in missing sections and seed moods absent by name."""
        document.setdefault("entries", [])
        document.setdefault("tags", [])
        moods = document.setdefault("moods", [])
        config = document.setdefault("configuration", {})
        for field, value in _default_configuration().items():
            config.setdefault(field, value)

        known = {mood["name"] for mood in moods}
        next_id = max((mood["id"] for mood in moods), default=0)
        for name, color, icon in MOOD_CATALOGUE:
            if name not in known:
                next_id += 1
                moods.append({"id": next_id, "name": name, "color": color, "icon": icon})

        sequences = document.setdefault("sequences", {})
        sequences["entries"] = max(
            [sequences.get("entries", 0)] + [item["id"] for item in document["entries"]]
        )
        sequences["tags"] = max(
            [sequences.get("tags", 0)] + [tag["id"] for tag in document["tags"]]
        )

    def shutdown(self) -> None:
        if self._data is not None:
            self._data = None
            self.kv_store.close()
            log_info("Blob store closed", key=self.key)

    # Persistence helpers
    def _document(self) -> Dict[str, Any]:
        if self._data is None:
            raise StorageError("Store not initialized; call ensure_schema() first")
        return self._data

    def _save(self, document: Dict[str, Any]) -> None:
        try:
            raw = json.dumps(document, ensure_ascii=False)
            # Text must survive a UTF-8 round trip (no lone surrogates)
            raw.encode("utf-8")
        except (TypeError, ValueError) as exc:
            log_error(exc, key=self.key)
            raise StorageError(f"Failed to serialize data: {exc}") from exc
        try:
            self.kv_store.set(self.key, raw)
        except StorageError as exc:
            log_error(exc, key=self.key)
            raise

    @contextmanager
    def _mutate(self) -> Iterator[Dict[str, Any]]:
        """Yield a draft of the document; persist and adopt it on success."""
        draft = copy.deepcopy(self._document())
        yield draft
        self._save(draft)
        self._data = draft

    @staticmethod
    def _find_entry(document: Dict[str, Any], entry_id: int) -> Optional[Dict[str, Any]]:
        return next((item for item in document["entries"] if item["id"] == entry_id), None)

    def _resolve_moods(self, names: List[str]) -> List[str]:
        known = {mood["name"] for mood in self._document()["moods"]}
        return [name for name in names if name in known]

    @staticmethod
    def _tag_id(document: Dict[str, Any], name: str, color: Optional[str] = None) -> int:
        """Get or create a tag inside ``document``."""
        for tag in document["tags"]:
            if tag["name"] == name:
                return tag["id"]
        document["sequences"]["tags"] += 1
        tag_id = document["sequences"]["tags"]
        document["tags"].append({"id": tag_id, "name": name, "color": color or DEFAULT_TAG_COLOR})
        log_info(f"Tag created: {name}")
        return tag_id

    def _catalogue_order(self) -> Dict[str, int]:
        return {mood["name"]: mood["id"] for mood in self._document()["moods"]}

    # Entries
    def create_entry(self, entry_data: Union[MoodEntryCreate, Mapping[str, Any]]) -> MoodEntryRead:
        entry_data = as_schema(entry_data, MoodEntryCreate)
        mood_names = self._resolve_moods(entry_data.mood_names)

        with self._mutate() as draft:
            for name in entry_data.tag_names:
                self._tag_id(draft, name)
            draft["sequences"]["entries"] += 1
            item = {
                "id": draft["sequences"]["entries"],
                "timestamp": to_iso(entry_data.timestamp or utc_now()),
                "notes": entry_data.notes,
                "mood_names": mood_names,
                "tag_names": list(entry_data.tag_names),
            }
            draft["entries"].append(item)

        log_info(f"Entry created: {item['id']}")
        return _entry_from_document(item)

    def get_all_entries(self) -> List[MoodEntryRead]:
        return _newest_first([_entry_from_document(item) for item in self._document()["entries"]])

    def get_entry(self, entry_id: int) -> Optional[MoodEntryRead]:
        item = self._find_entry(self._document(), entry_id)
        return _entry_from_document(item) if item else None

    def get_entries_by_date(self, day: Day) -> List[MoodEntryRead]:
        start, end = day_bounds(day)
        return [e for e in self.get_all_entries() if start <= e.timestamp < end]

    def update_entry(self, entry_id: int, entry_data: Union[MoodEntryUpdate, Mapping[str, Any]]) -> bool:
        changes = as_schema(entry_data, MoodEntryUpdate).provided()
        if not changes or self._find_entry(self._document(), entry_id) is None:
            return False

        with self._mutate() as draft:
            item = self._find_entry(draft, entry_id)
            if "notes" in changes:
                item["notes"] = changes["notes"]
            if "mood_names" in changes:
                item["mood_names"] = self._resolve_moods(changes["mood_names"])
            if "tag_names" in changes:
                for name in changes["tag_names"]:
                    self._tag_id(draft, name)
                item["tag_names"] = list(changes["tag_names"])

        log_info(f"Entry updated: {entry_id} ({', '.join(sorted(changes))})")
        return True

    def delete_entry(self, entry_id: int) -> bool:
        if self._find_entry(self._document(), entry_id) is None:
            return False

        with self._mutate() as draft:
            draft["entries"] = [item for item in draft["entries"] if item["id"] != entry_id]

        log_info(f"Entry hard-deleted: {entry_id}")
        return True

    def delete_all_entries(self) -> bool:
        count = len(self._document()["entries"])
        if count:
            with self._mutate() as draft:
                draft["entries"] = []
        log_info(f"All entries deleted: {count}")
        return count > 0

    # Catalogues
    def get_or_create_tag(self, name: str, color: Optional[str] = None) -> int:
        name = require_tag_name(name)
        for tag in self._document()["tags"]:
            if tag["name"] == name:
                return tag["id"]
        with self._mutate() as draft:
            tag_id = self._tag_id(draft, name, color)
        return tag_id

    def list_tags(self) -> List[TagRead]:
        tags = sorted(self._document()["tags"], key=lambda tag: tag["name"])
        return [TagRead.model_validate(tag) for tag in tags]

    def list_moods(self) -> List[MoodRead]:
        moods = sorted(self._document()["moods"], key=lambda mood: mood["id"])
        return [MoodRead.model_validate(mood) for mood in moods]

    # Configuration
    def get_configuration(self) -> Optional[ConfigurationRead]:
        config = self._document().get("configuration")
        return ConfigurationRead.model_validate(config) if config else None

    def update_configuration(self, config_data: Union[ConfigurationUpdate, Mapping[str, Any]]) -> bool:
        changes = as_schema(config_data, ConfigurationUpdate).provided()
        if not changes:
            return False

        with self._mutate() as draft:
            for field, value in changes.items():
                draft["configuration"][field] = getattr(value, "value", value)

        log_info(f"Configuration updated: {', '.join(sorted(changes))}")
        return True

    # Stats
    def get_stats(self) -> MoodStats:
        return compute_stats(self.get_all_entries(), self._catalogue_order())

    def get_mood_distribution(self) -> Dict[str, int]:
        return compute_mood_distribution(self.get_all_entries(), self._catalogue_order())

    def get_daily_counts(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Dict[str, int]:
        return compute_daily_counts(self.get_all_entries(), start_date, end_date)
