"""User model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from daily_journal.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.now, onupdate=datetime.now)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(50), nullable=False)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    preferences: Mapped[dict] = mapped_column(db.JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(default=True)

    # Derived from the user's entries; only written by stats recomputation.
    total_entries: Mapped[int] = mapped_column(default=0, nullable=False)
    total_words: Mapped[int] = mapped_column(default=0, nullable=False)
    streak: Mapped[int] = mapped_column(default=0, nullable=False)
    last_entry_date: Mapped[datetime | None] = mapped_column()

    @property
    def stats(self) -> dict:
        return {
            "total_entries": self.total_entries or 0,
            "total_words": self.total_words or 0,
            "streak": self.streak or 0,
            "last_entry_date": self.last_entry_date.isoformat() if self.last_entry_date else None,
        }
