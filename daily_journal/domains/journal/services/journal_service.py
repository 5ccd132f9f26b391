"""Journal services: CRUD, listing and search with event emission."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from daily_journal.core.errors import Conflict, ValidationFailed
from daily_journal.core.events.event_service import publish_event
from daily_journal.core.users.models import User
from daily_journal.core.utils.pagination import pagination_meta
from daily_journal.domains.journal.events import (
    JOURNAL_ENTRY_CREATED,
    JOURNAL_ENTRY_DELETED,
    JOURNAL_ENTRY_UPDATED,
)
from daily_journal.domains.journal.mappers import map_export_entry, map_search_result
from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.schemas.journal_schemas import (
    EntryCreate,
    EntryListFilter,
    EntrySearchFilter,
    EntryUpdate,
    to_local_naive,
)
from daily_journal.domains.journal.services.lifecycle import apply_derived_fields
from daily_journal.domains.journal.services.query_builder import (
    build_entry_query,
    build_search_query,
)
from daily_journal.domains.journal.stores import EntryStore, get_entry_store


def parse_entry_id(raw: Any) -> int:
    try:
        entry_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationFailed("Invalid entry ID") from None
    if entry_id < 1:
        raise ValidationFailed("Invalid entry ID")
    return entry_id


def create_entry(user_id: int, data: EntryCreate, store: Optional[EntryStore] = None) -> JournalEntry:
    entry = JournalEntry(
        user_id=user_id,
        title=data.title,
        content=data.content,
        mood=data.mood,
        category=data.category,
        tags=list(data.tags),
        entry_date=to_local_naive(data.entry_date) if data.entry_date else datetime.now(),
        is_private=data.is_private,
        is_favorite=data.is_favorite,
        attachments=[a.model_dump(exclude_none=True) for a in data.attachments],
        location=data.location.model_dump(exclude_none=True) if data.location else None,
        weather=data.weather.model_dump(exclude_none=True) if data.weather else None,
        sentiment=data.sentiment.model_dump(exclude_none=True) if data.sentiment else None,
        version=1,
    )
    apply_derived_fields(entry)
    entry = get_entry_store(store).add(entry)
    publish_event(
        JOURNAL_ENTRY_CREATED,
        {
            "entry_id": entry.id,
            "user_id": user_id,
            "entry_date": entry.entry_date.isoformat(),
            "mood": entry.mood,
            "category": entry.category,
            "word_count": entry.word_count,
        },
        user_id=user_id,
    )
    return entry


def get_entry(user_id: int, entry_id: int, store: Optional[EntryStore] = None) -> Optional[JournalEntry]:
    return get_entry_store(store).get(user_id, entry_id)


def update_entry(
    user_id: int,
    entry_id: int,
    data: EntryUpdate,
    store: Optional[EntryStore] = None,
) -> Optional[JournalEntry]:
    entry_store = get_entry_store(store)
    entry = entry_store.get(user_id, entry_id)
    if not entry:
        return None
    if data.version is not None and data.version != entry.version:
        raise Conflict(
            f"Entry was modified (version {entry.version}, got {data.version})",
            field="version",
        )
    changes = data.changes()
    if "entry_date" in changes:
        changes["entry_date"] = to_local_naive(changes["entry_date"])
    for key, value in changes.items():
        setattr(entry, key, value)
    apply_derived_fields(entry)
    entry.version = (entry.version or 1) + 1
    entry = entry_store.save(entry)
    _publish_updated(entry, sorted(changes))
    return entry


def toggle_favorite(user_id: int, entry_id: int, store: Optional[EntryStore] = None) -> Optional[JournalEntry]:
    entry_store = get_entry_store(store)
    entry = entry_store.get(user_id, entry_id)
    if not entry:
        return None
    entry.is_favorite = not entry.is_favorite
    entry.version = (entry.version or 1) + 1
    entry = entry_store.save(entry)
    _publish_updated(entry, ["is_favorite"])
    return entry


def delete_entry(user_id: int, entry_id: int, store: Optional[EntryStore] = None) -> bool:
    removed = get_entry_store(store).delete(user_id, entry_id)
    if removed is None:
        return False
    publish_event(
        JOURNAL_ENTRY_DELETED,
        {"entry_id": entry_id, "user_id": user_id},
        user_id=user_id,
    )
    return True


def list_entries(
    user_id: int,
    filters: EntryListFilter,
    store: Optional[EntryStore] = None,
) -> Tuple[List[JournalEntry], Dict[str, Any]]:
    query = build_entry_query(user_id, filters)
    entries, total = get_entry_store(store).find(query)
    return entries, pagination_meta(query.page, query.limit, total)


def search_entries(
    user_id: int,
    filters: EntrySearchFilter,
    store: Optional[EntryStore] = None,
) -> Dict[str, Any]:
    query = build_search_query(user_id, filters)
    entries, _ = get_entry_store(store).find(query)
    return {
        "entries": [map_search_result(entry) for entry in entries],
        "count": len(entries),
        "query": filters.q or "",
    }


def export_entries(user: User, store: Optional[EntryStore] = None) -> Dict[str, Any]:
    entries = get_entry_store(store).scan(user.id)
    return {
        "user": {"name": user.name, "email": user.email},
        "export_date": datetime.now().isoformat(),
        "total_entries": len(entries),
        "entries": [map_export_entry(entry) for entry in entries],
    }


def _publish_updated(entry: JournalEntry, fields: List[str]) -> None:
    publish_event(
        JOURNAL_ENTRY_UPDATED,
        {
            "entry_id": entry.id,
            "user_id": entry.user_id,
            "fields": fields,
            "version": entry.version,
        },
        user_id=entry.user_id,
    )
