"""
In-memory filtering and search over already-loaded entries.

Matching is accent- and case-insensitive here only; storage keeps names
exactly as written.
"""
import unicodedata
from typing import Iterable, List, Optional

from moodjournal.core.time_utils import day_bounds
from moodjournal.schemas.entry import MoodEntryRead
from moodjournal.schemas.stats import EntryFilters


def normalize_text(value: Optional[str]) -> str:
    """Fold accents and case: 'Família ' -> 'familia'."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.strip().lower()


def _normalized(names: Iterable[str]) -> set:
    return {normalize_text(name) for name in names}


def filter_entries(entries: Iterable[MoodEntryRead], filters: EntryFilters) -> List[MoodEntryRead]:
    """Apply ``filters`` to ``entries``, keeping their order.

    Moods match if the entry has any of them; tags only if it has all of them.
    """
    result = list(entries)

    if filters.mood_names:
        wanted = _normalized(filters.mood_names)
        result = [e for e in result if wanted & _normalized(e.mood_names)]

    if filters.tag_names:
        wanted = _normalized(filters.tag_names)
        result = [e for e in result if wanted <= _normalized(e.tag_names)]

    if filters.start_date:
        start = day_bounds(filters.start_date)[0]
        result = [e for e in result if e.timestamp >= start]

    if filters.end_date:
        end = day_bounds(filters.end_date)[1]
        result = [e for e in result if e.timestamp < end]

    query = normalize_text(filters.search_text)
    if query:
        result = [
            e for e in result
            if query in normalize_text(e.notes)
            or any(query in normalize_text(name) for name in e.mood_names)
            or any(query in normalize_text(name) for name in e.tag_names)
        ]

    return result
