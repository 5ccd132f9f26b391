"""Entry query construction and the matching/ordering rules every store honors."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from daily_journal.core.utils.pagination import page_offset
from daily_journal.domains.journal.constants import (
    DEFAULT_PAGE_SIZE,
    SEARCH_WEIGHTS,
    SORT_FIELDS,
)
from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.schemas.journal_schemas import (
    EntryListFilter,
    EntrySearchFilter,
)

_WORD_RE = re.compile(r"\w+", re.UNICODE)


@dataclass(frozen=True)
class EntryQuery:
    user_id: int
    mood: Optional[str] = None
    category: Optional[str] = None
    search_terms: Tuple[str, ...] = ()
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    is_favorite: Optional[bool] = None
    sort_field: str = "entry_date"
    descending: bool = True
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.limit)

    @property
    def is_search(self) -> bool:
        return bool(self.search_terms)


def tokenize(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [token.lower() for token in _WORD_RE.findall(text)]


def search_terms(text: Optional[str]) -> Tuple[str, ...]:
    # Unique terms in first-seen order.
    return tuple(dict.fromkeys(tokenize(text)))


def build_entry_query(user_id: int, filters: EntryListFilter) -> EntryQuery:
    return EntryQuery(
        user_id=user_id,
        mood=filters.mood,
        category=filters.category,
        search_terms=search_terms(filters.search),
        start=filters.start_date,
        end=filters.end_date,
        is_favorite=filters.is_favorite,
        sort_field=SORT_FIELDS[filters.sort_by],
        descending=filters.sort_order == "desc",
        page=filters.page,
        limit=filters.limit,
    )


def build_search_query(user_id: int, filters: EntrySearchFilter) -> EntryQuery:
    return EntryQuery(
        user_id=user_id,
        mood=filters.mood,
        category=filters.category,
        search_terms=search_terms(filters.q),
        start=filters.start_date,
        end=filters.end_date,
        page=1,
        limit=filters.limit,
    )


def relevance(entry: JournalEntry, terms: Sequence[str]) -> int:
    """Weighted whole-word hit count of ``terms`` in title, content and tags."""
    if not terms:
        return 0
    fields = {
        "title": tokenize(entry.title),
        "content": tokenize(entry.content),
        "tags": tokenize(" ".join(entry.tags or [])),
    }
    score = 0
    for term in terms:
        for name, tokens in fields.items():
            score += SEARCH_WEIGHTS[name] * tokens.count(term)
    return score


def matches_filters(entry: JournalEntry, query: EntryQuery) -> bool:
    """Structured (non-text) filters, scoped to the owning user."""
    if entry.user_id != query.user_id:
        return False
    if query.mood is not None and entry.mood != query.mood:
        return False
    if query.category is not None and entry.category != query.category:
        return False
    if query.is_favorite is not None and bool(entry.is_favorite) != query.is_favorite:
        return False
    if query.start is not None and entry.entry_date < query.start:
        return False
    if query.end is not None and entry.entry_date > query.end:
        return False
    return True


def rank_by_relevance(entries: Iterable[JournalEntry], terms: Sequence[str]) -> List[JournalEntry]:
    """Drop entries with no hits; order by score, then date, newest first."""
    scored = [(relevance(entry, terms), entry) for entry in entries]
    scored = [pair for pair in scored if pair[0] > 0]
    scored.sort(key=lambda pair: (pair[0], pair[1].entry_date, pair[1].id), reverse=True)
    return [entry for _, entry in scored]


def order_entries(entries: Iterable[JournalEntry], query: EntryQuery) -> List[JournalEntry]:
    return sorted(
        entries,
        key=lambda entry: (getattr(entry, query.sort_field), entry.id),
        reverse=query.descending,
    )


def select_page(entries: Iterable[JournalEntry], query: EntryQuery) -> Tuple[List[JournalEntry], int]:
    """Apply matching, ordering and pagination to an in-Python candidate set."""
    candidates = [entry for entry in entries if matches_filters(entry, query)]
    if query.is_search:
        ordered = rank_by_relevance(candidates, query.search_terms)
    else:
        ordered = order_entries(candidates, query)
    return ordered[query.offset : query.offset + query.limit], len(ordered)
