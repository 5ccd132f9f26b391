"""Calendar, statistics and dashboard aggregations.

The module-level helpers are pure functions over sequences of entries; the
``*_view``/``summary_statistics`` functions fetch from the entry store and
assemble response payloads from them.
"""

from __future__ import annotations

import calendar
from collections import Counter
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from daily_journal.core.errors import ValidationFailed
from daily_journal.core.users.models import User
from daily_journal.core.users.schemas import serialize_user
from daily_journal.domains.journal.constants import (
    MONTHLY_ACTIVITY_MONTHS,
    RECENT_ENTRIES_LIMIT,
    STREAK_MAX_DAYS,
)
from daily_journal.domains.journal.mappers import (
    map_calendar_entry,
    map_recent_entry,
    map_today_entry,
)
from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.services.lifecycle import refresh_stats_safely
from daily_journal.domains.journal.services.query_builder import EntryQuery
from daily_journal.domains.journal.stores import EntryStore, get_entry_store


def day_key(value: datetime) -> str:
    return value.date().isoformat()


def month_bounds(year: Any, month: Any) -> Tuple[datetime, datetime]:
    """First instant and last instant of a calendar month."""
    try:
        year_int, month_int = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationFailed("year and month must be integers") from None
    if not 1 <= year_int <= 9999:
        raise ValidationFailed("year must be between 1 and 9999")
    if not 1 <= month_int <= 12:
        raise ValidationFailed("month must be between 1 and 12")
    last_day = calendar.monthrange(year_int, month_int)[1]
    start = datetime(year_int, month_int, 1)
    end = datetime.combine(date(year_int, month_int, last_day), time.max)
    return start, end


def group_by_day(entries: Iterable[JournalEntry]) -> Dict[str, List[dict]]:
    """Group projected entries by YYYY-MM-DD, preserving scan order."""
    groups: Dict[str, List[dict]] = {}
    for entry in entries:
        groups.setdefault(day_key(entry.entry_date), []).append(map_calendar_entry(entry))
    return groups


def _distribution(values: Iterable[str], label: str) -> List[dict]:
    counts = Counter(values)
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [{label: value, "count": count} for value, count in ordered]


def mood_distribution(entries: Iterable[JournalEntry]) -> List[dict]:
    return _distribution((entry.mood for entry in entries), "mood")


def category_distribution(entries: Iterable[JournalEntry]) -> List[dict]:
    return _distribution((entry.category for entry in entries), "category")


def total_words(entries: Iterable[JournalEntry]) -> int:
    return sum(entry.word_count or 0 for entry in entries)


def average_words_per_entry(words: int, count: int) -> int:
    """Half-up rounded mean; 0 when there are no entries."""
    if count <= 0:
        return 0
    return (2 * words + count) // (2 * count)


def months_ago(now: datetime, months: int) -> datetime:
    """Same wall-clock instant ``months`` earlier, clamped to month length."""
    index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def monthly_activity(
    entries: Iterable[JournalEntry],
    now: datetime,
    months: int = MONTHLY_ACTIVITY_MONTHS,
) -> List[dict]:
    cutoff = months_ago(now, months)
    buckets: Dict[Tuple[int, int], Dict[str, int]] = {}
    for entry in entries:
        if entry.entry_date < cutoff:
            continue
        key = (entry.entry_date.year, entry.entry_date.month)
        bucket = buckets.setdefault(key, {"count": 0, "words": 0})
        bucket["count"] += 1
        bucket["words"] += entry.word_count or 0
    return [
        {"year": year, "month": month, "count": bucket["count"], "words": bucket["words"]}
        for (year, month), bucket in sorted(buckets.items())
    ]


def streak_data(entries: Iterable[JournalEntry], max_days: int = STREAK_MAX_DAYS) -> List[dict]:
    """Entry counts per distinct day, newest day first, capped at ``max_days``."""
    per_day = Counter(day_key(entry.entry_date) for entry in entries)
    days = sorted(per_day.items(), key=lambda item: item[0], reverse=True)[:max_days]
    return [{"date": day, "count": count} for day, count in days]


def calendar_view(user_id: int, year: Any, month: Any, store: Optional[EntryStore] = None) -> dict:
    start, end = month_bounds(year, month)
    entries = get_entry_store(store).scan(user_id, start=start, end=end, ascending=True)
    return {
        "year": start.year,
        "month": start.month,
        "entries": group_by_day(entries),
        "total_entries": len(entries),
    }


def summarize(entries: Sequence[JournalEntry], now: datetime) -> dict:
    words = total_words(entries)
    return {
        "total_entries": len(entries),
        "total_words": words,
        "mood_distribution": mood_distribution(entries),
        "category_distribution": category_distribution(entries),
        "monthly_activity": monthly_activity(entries, now),
        "streak_data": streak_data(entries),
        "average_words_per_entry": average_words_per_entry(words, len(entries)),
    }


def summary_statistics(
    user: User,
    store: Optional[EntryStore] = None,
    now: Optional[datetime] = None,
) -> dict:
    entries = get_entry_store(store).scan(user.id)
    summary = summarize(entries, now or datetime.now())
    summary["user_stats"] = user.stats
    return summary


def dashboard_view(
    user: User,
    store: Optional[EntryStore] = None,
    now: Optional[datetime] = None,
) -> dict:
    entry_store = get_entry_store(store)
    now = now or datetime.now()
    recent, _ = entry_store.find(
        EntryQuery(user_id=user.id, sort_field="entry_date", descending=True, limit=RECENT_ENTRIES_LIMIT)
    )
    today = now.date()
    todays = entry_store.scan(
        user.id,
        start=datetime.combine(today, time.min),
        end=datetime.combine(today + timedelta(days=1), time.min) - timedelta(microseconds=1),
    )
    refresh_stats_safely(user.id, entry_store)
    return {
        "user": serialize_user(user).model_dump(mode="json"),
        "recent_entries": [map_recent_entry(entry) for entry in recent],
        "has_written_today": bool(todays),
        "today_entry": map_today_entry(todays[0]) if todays else None,
    }
