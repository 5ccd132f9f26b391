"""Personal journal entry."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from daily_journal.extensions import db


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (
        db.Index("ix_journal_entry_user_entry_date", "user_id", "entry_date"),
        db.Index("ix_journal_entry_user_created_at", "user_id", "created_at"),
        db.Index("ix_journal_entry_user_mood", "user_id", "mood"),
        db.Index("ix_journal_entry_user_category", "user_id", "category"),
        db.Index("ix_journal_entry_user_favorite", "user_id", "is_favorite"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(db.String(200), nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    mood: Mapped[str] = mapped_column(db.String(16), nullable=False)
    category: Mapped[str] = mapped_column(db.String(32), nullable=False)
    tags: Mapped[list] = mapped_column(db.JSON, default=list)
    word_count: Mapped[int] = mapped_column(default=0)
    reading_time: Mapped[int] = mapped_column(default=0)
    # Server-local wall clock; calendar days and "today" use the same clock.
    entry_date: Mapped[datetime] = mapped_column(default=datetime.now, nullable=False)
    is_private: Mapped[bool] = mapped_column(default=True)
    is_favorite: Mapped[bool] = mapped_column(default=False)
    attachments: Mapped[list] = mapped_column(db.JSON, default=list)
    location: Mapped[dict | None] = mapped_column(db.JSON)
    weather: Mapped[dict | None] = mapped_column(db.JSON)
    sentiment: Mapped[dict | None] = mapped_column(db.JSON)
    version: Mapped[int] = mapped_column(default=1, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.now, onupdate=datetime.now)

    def __repr__(self) -> str:
        return f"<JournalEntry id={self.id} user_id={self.user_id} entry_date={self.entry_date}>"
