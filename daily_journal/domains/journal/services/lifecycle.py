"""Entry lifecycle: derived fields before persistence, user stats after it."""

from __future__ import annotations

import logging
import math
from typing import Optional

from daily_journal.core.events.event_bus import EventBus
from daily_journal.core.events.event_models import DomainEvent
from daily_journal.core.users.models import User
from daily_journal.core.users.services import get_user
from daily_journal.domains.journal.constants import WORDS_PER_MINUTE
from daily_journal.domains.journal.events import ENTRY_LIFECYCLE_EVENTS
from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.stores import EntryStore, get_entry_store
from daily_journal.extensions import db

logger = logging.getLogger(__name__)


def count_words(content: Optional[str]) -> int:
    if not content:
        return 0
    return len(content.split())


def reading_time(word_count: int) -> int:
    """Minutes at WORDS_PER_MINUTE, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def apply_derived_fields(entry: JournalEntry) -> JournalEntry:
    # Always recomputed; caller-supplied values are ignored.
    entry.word_count = count_words(entry.content)
    entry.reading_time = reading_time(entry.word_count)
    return entry


def recompute_user_stats(user_id: int, store: Optional[EntryStore] = None) -> Optional[User]:
    """Full re-scan of a user's entries into the stored stats columns."""
    user = get_user(user_id)
    if user is None:
        logger.warning("stats recompute skipped, user %s not found", user_id)
        return None
    entries = get_entry_store(store).scan(user_id)
    user.total_entries = len(entries)
    user.total_words = sum(entry.word_count or 0 for entry in entries)
    # scan() is newest first
    user.last_entry_date = entries[0].entry_date if entries else None
    db.session.commit()
    logger.debug("stats for user %s: %s entries, %s words", user_id, user.total_entries, user.total_words)
    return user


def refresh_stats_safely(user_id: int, store: Optional[EntryStore] = None) -> Optional[User]:
    """Recompute stats; failures are logged and never propagate."""
    try:
        return recompute_user_stats(user_id, store)
    except Exception:
        db.session.rollback()
        logger.exception("stats recompute failed for user %s", user_id)
        return None


def handle_entry_event(event: DomainEvent) -> None:
    user_id = event.user_id or event.payload.get("user_id")
    if user_id is None:
        logger.warning("entry event %s without user id", event.event_type)
        return
    refresh_stats_safely(user_id)


def register_subscriptions(bus: EventBus) -> None:
    for event_type in ENTRY_LIFECYCLE_EVENTS:
        bus.subscribe(event_type, handle_entry_event)
