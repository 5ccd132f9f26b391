"""Entry store backends and lookup."""

from __future__ import annotations

from typing import Optional

from flask import current_app

from daily_journal.domains.journal.stores.base import EntryStore
from daily_journal.domains.journal.stores.memory_store import InMemoryEntryStore
from daily_journal.domains.journal.stores.sqlalchemy_store import SqlAlchemyEntryStore

STORE_BACKENDS = {
    "sqlalchemy": SqlAlchemyEntryStore,
    "memory": InMemoryEntryStore,
}


def build_entry_store(backend: str) -> EntryStore:
    try:
        return STORE_BACKENDS[backend]()
    except KeyError:
        raise ValueError(f"Unknown ENTRY_STORE_BACKEND {backend!r}") from None


def get_entry_store(store: Optional[EntryStore] = None) -> EntryStore:
    """Return ``store`` or the store attached to the current app."""
    if store is not None:
        return store
    return current_app.extensions["entry_store"]


__all__ = [
    "EntryStore",
    "InMemoryEntryStore",
    "SqlAlchemyEntryStore",
    "build_entry_store",
    "get_entry_store",
]
