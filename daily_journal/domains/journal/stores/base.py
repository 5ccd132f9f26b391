"""Entry storage interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.services.query_builder import EntryQuery


class EntryStore(ABC):
    """Persisted collection of journal entries, always addressed per user."""

    @abstractmethod
    def add(self, entry: JournalEntry) -> JournalEntry:
        """Insert a new entry and return it with id and timestamps assigned."""

    @abstractmethod
    def save(self, entry: JournalEntry) -> JournalEntry:
        """Persist changes to an existing entry."""

    @abstractmethod
    def get(self, user_id: int, entry_id: int) -> Optional[JournalEntry]:
        ...

    @abstractmethod
    def delete(self, user_id: int, entry_id: int) -> Optional[JournalEntry]:
        """Remove an entry; returns the removed entry or None when not owned/absent."""

    @abstractmethod
    def find(self, query: EntryQuery) -> Tuple[List[JournalEntry], int]:
        """Return one page of matches and the total match count."""

    @abstractmethod
    def scan(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        ascending: bool = False,
    ) -> List[JournalEntry]:
        """All entries of a user within the inclusive date range, by entry date."""
