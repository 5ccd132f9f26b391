"""Default and merged preferences for users."""

from __future__ import annotations

from typing import Any, Dict

from daily_journal.core.users.models import User

DEFAULT_PREFS: Dict[str, Any] = {
    "theme": "light",
    "default_mood": "neutral",
    "default_category": "Personal",
}


def get_preferences(user: User) -> Dict[str, Any]:
    """Merge stored preferences with defaults."""
    prefs = DEFAULT_PREFS.copy()
    prefs.update(user.preferences or {})
    return prefs


def set_preferences(user: User, values: Dict[str, Any]) -> None:
    # Reassign so the JSON column is flagged dirty.
    merged = dict(user.preferences or {})
    merged.update(values)
    user.preferences = merged
