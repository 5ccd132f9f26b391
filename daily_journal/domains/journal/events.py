"""Journal domain event catalog."""

from __future__ import annotations

JOURNAL_ENTRY_CREATED = "journal.entry.created"
JOURNAL_ENTRY_UPDATED = "journal.entry.updated"
JOURNAL_ENTRY_DELETED = "journal.entry.deleted"

ENTRY_LIFECYCLE_EVENTS = (
    JOURNAL_ENTRY_CREATED,
    JOURNAL_ENTRY_UPDATED,
    JOURNAL_ENTRY_DELETED,
)

EVENT_CATALOG = {
    JOURNAL_ENTRY_CREATED: {
        "version": "v1",
        "payload": {
            "entry_id": "int",
            "user_id": "int",
            "entry_date": "datetime",
            "mood": "str",
            "category": "str",
            "word_count": "int",
        },
    },
    JOURNAL_ENTRY_UPDATED: {
        "version": "v1",
        "payload": {
            "entry_id": "int",
            "user_id": "int",
            "fields": "list[str]",
            "version": "int",
        },
    },
    JOURNAL_ENTRY_DELETED: {
        "version": "v1",
        "payload": {
            "entry_id": "int",
            "user_id": "int",
        },
    },
}

__all__ = [
    "ENTRY_LIFECYCLE_EVENTS",
    "EVENT_CATALOG",
    "JOURNAL_ENTRY_CREATED",
    "JOURNAL_ENTRY_UPDATED",
    "JOURNAL_ENTRY_DELETED",
]
