from daily_journal.domains.journal.schemas.journal_schemas import (
    EntryCreate,
    EntryListFilter,
    EntryResponse,
    EntrySearchFilter,
    EntryUpdate,
)

__all__ = [
    "EntryCreate",
    "EntryListFilter",
    "EntryResponse",
    "EntrySearchFilter",
    "EntryUpdate",
]
