"""Flask-SQLAlchemy backed entry store."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.services.query_builder import EntryQuery, rank_by_relevance
from daily_journal.domains.journal.stores.base import EntryStore
from daily_journal.extensions import db


class SqlAlchemyEntryStore(EntryStore):
    def add(self, entry: JournalEntry) -> JournalEntry:
        db.session.add(entry)
        db.session.commit()
        return entry

    def save(self, entry: JournalEntry) -> JournalEntry:
        db.session.add(entry)
        db.session.commit()
        return entry

    def get(self, user_id: int, entry_id: int) -> Optional[JournalEntry]:
        return JournalEntry.query.filter_by(id=entry_id, user_id=user_id).first()

    def delete(self, user_id: int, entry_id: int) -> Optional[JournalEntry]:
        entry = self.get(user_id, entry_id)
        if not entry:
            return None
        db.session.delete(entry)
        db.session.commit()
        return entry

    def find(self, query: EntryQuery) -> Tuple[List[JournalEntry], int]:
        q = self._filtered(query)
        if query.is_search:
            # Text matching is Unicode case folding over decoded tags, so it
            # runs in Python over the structurally filtered rows.
            ranked = rank_by_relevance(q.all(), query.search_terms)
            return ranked[query.offset : query.offset + query.limit], len(ranked)

        total = q.count()
        column = getattr(JournalEntry, query.sort_field)
        if query.descending:
            order = (column.desc(), JournalEntry.id.desc())
        else:
            order = (column.asc(), JournalEntry.id.asc())
        entries = q.order_by(*order).offset(query.offset).limit(query.limit).all()
        return entries, total

    def scan(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        ascending: bool = False,
    ) -> List[JournalEntry]:
        q = JournalEntry.query.filter_by(user_id=user_id)
        if start is not None:
            q = q.filter(JournalEntry.entry_date >= start)
        if end is not None:
            q = q.filter(JournalEntry.entry_date <= end)
        if ascending:
            q = q.order_by(JournalEntry.entry_date.asc(), JournalEntry.id.asc())
        else:
            q = q.order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc())
        return q.all()

    @staticmethod
    def _filtered(query: EntryQuery):
        q = JournalEntry.query.filter_by(user_id=query.user_id)
        if query.mood is not None:
            q = q.filter(JournalEntry.mood == query.mood)
        if query.category is not None:
            q = q.filter(JournalEntry.category == query.category)
        if query.is_favorite is not None:
            q = q.filter(JournalEntry.is_favorite.is_(query.is_favorite))
        if query.start is not None:
            q = q.filter(JournalEntry.entry_date >= query.start)
        if query.end is not None:
            q = q.filter(JournalEntry.entry_date <= query.end)
        return q
