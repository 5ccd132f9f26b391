"""Journal mappers for DTO responses."""

from __future__ import annotations

from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.schemas.journal_schemas import EntryResponse


def _iso(value):
    return value.isoformat() if value else None


def map_entry(entry: JournalEntry) -> dict:
    return EntryResponse(
        id=entry.id,
        title=entry.title,
        content=entry.content,
        mood=entry.mood,
        category=entry.category,
        tags=entry.tags or [],
        word_count=entry.word_count or 0,
        reading_time=entry.reading_time or 0,
        entry_date=entry.entry_date,
        is_private=bool(entry.is_private),
        is_favorite=bool(entry.is_favorite),
        attachments=entry.attachments or [],
        location=entry.location,
        weather=entry.weather,
        sentiment=entry.sentiment,
        version=entry.version or 1,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    ).model_dump(mode="json")


def map_calendar_entry(entry: JournalEntry) -> dict:
    return {
        "id": entry.id,
        "title": entry.title,
        "mood": entry.mood,
        "category": entry.category,
        "entry_date": _iso(entry.entry_date),
        "word_count": entry.word_count or 0,
        "is_favorite": bool(entry.is_favorite),
    }


def map_recent_entry(entry: JournalEntry) -> dict:
    return {
        "id": entry.id,
        "title": entry.title,
        "mood": entry.mood,
        "category": entry.category,
        "entry_date": _iso(entry.entry_date),
        "word_count": entry.word_count or 0,
    }


def map_today_entry(entry: JournalEntry) -> dict:
    return {
        "id": entry.id,
        "title": entry.title,
        "mood": entry.mood,
        "word_count": entry.word_count or 0,
    }


def map_search_result(entry: JournalEntry) -> dict:
    return {
        "id": entry.id,
        "title": entry.title,
        "content": entry.content,
        "mood": entry.mood,
        "category": entry.category,
        "entry_date": _iso(entry.entry_date),
        "word_count": entry.word_count or 0,
        "is_favorite": bool(entry.is_favorite),
    }


def map_export_entry(entry: JournalEntry) -> dict:
    data = map_entry(entry)
    data.pop("version", None)
    return data
