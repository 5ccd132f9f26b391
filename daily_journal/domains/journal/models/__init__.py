from daily_journal.domains.journal.models.journal_entry import JournalEntry

__all__ = ["JournalEntry"]
