"""Process-local entry store.

Holds transient ``JournalEntry`` instances in a dict. Used by the ``memory``
backend and by tests that exercise query and aggregation logic without a
database.
"""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.services.query_builder import EntryQuery, select_page
from daily_journal.domains.journal.stores.base import EntryStore


class InMemoryEntryStore(EntryStore):
    def __init__(self) -> None:
        self._entries: Dict[int, JournalEntry] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: JournalEntry) -> JournalEntry:
        now = datetime.now()
        entry.id = next(self._ids)
        entry.created_at = entry.created_at or now
        entry.updated_at = entry.updated_at or now
        if entry.entry_date is None:
            entry.entry_date = now
        if entry.version is None:
            entry.version = 1
        self._entries[entry.id] = entry
        return entry

    def save(self, entry: JournalEntry) -> JournalEntry:
        entry.updated_at = datetime.now()
        self._entries[entry.id] = entry
        return entry

    def get(self, user_id: int, entry_id: int) -> Optional[JournalEntry]:
        entry = self._entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def delete(self, user_id: int, entry_id: int) -> Optional[JournalEntry]:
        entry = self.get(user_id, entry_id)
        if entry is None:
            return None
        del self._entries[entry_id]
        return entry

    def find(self, query: EntryQuery) -> Tuple[List[JournalEntry], int]:
        return select_page(self._entries.values(), query)

    def scan(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        ascending: bool = False,
    ) -> List[JournalEntry]:
        selected = [
            entry
            for entry in self._entries.values()
            if entry.user_id == user_id
            and (start is None or entry.entry_date >= start)
            and (end is None or entry.entry_date <= end)
        ]
        selected.sort(key=lambda entry: (entry.entry_date, entry.id), reverse=not ascending)
        return selected
