"""
Aggregates computed in Python from loaded entries.

Used by backends without a query engine. Results match the SQL aggregates:
counts descend, ties fall back to catalogue order.
"""
from collections import Counter
from datetime import date
from typing import Dict, List, Optional, Sequence

from moodjournal.core.time_utils import day_bounds
from moodjournal.schemas.entry import MoodEntryRead
from moodjournal.schemas.stats import MoodStats, NO_MOOD


def _ranked(counts: Counter, catalogue_order: Dict[str, int]) -> List[str]:
    fallback = len(catalogue_order)
    return sorted(counts, key=lambda name: (-counts[name], catalogue_order.get(name, fallback), name))


def compute_stats(entries: Sequence[MoodEntryRead], catalogue_order: Dict[str, int]) -> MoodStats:
    """Total entries and most frequent primary mood."""
    counts = Counter(e.primary_mood for e in entries if e.primary_mood)
    ranked = _ranked(counts, catalogue_order)
    return MoodStats(total=len(entries), most_common_mood=ranked[0] if ranked else NO_MOOD)


def compute_mood_distribution(entries: Sequence[MoodEntryRead], catalogue_order: Dict[str, int]) -> Dict[str, int]:
    counts = Counter(name for e in entries for name in e.mood_names)
    return {name: counts[name] for name in _ranked(counts, catalogue_order)}


def compute_daily_counts(
    entries: Sequence[MoodEntryRead],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> Dict[str, int]:
    if start_date:
        start = day_bounds(start_date)[0]
        entries = [e for e in entries if e.timestamp >= start]
    if end_date:
        end = day_bounds(end_date)[1]
        entries = [e for e in entries if e.timestamp < end]

    counts = Counter(e.timestamp.date().isoformat() for e in entries)
    return dict(sorted(counts.items()))
