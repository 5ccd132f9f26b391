"""Journal domain vocabularies and limits."""

from __future__ import annotations

from enum import Enum


class Mood(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    EXCITED = "excited"
    CALM = "calm"
    ANXIOUS = "anxious"
    GRATEFUL = "grateful"
    ANGRY = "angry"
    NEUTRAL = "neutral"


class Category(str, Enum):
    PERSONAL = "Personal"
    WORK = "Work"
    HEALTH = "Health"
    RELATIONSHIPS = "Relationships"
    GOALS = "Goals"
    TRAVEL = "Travel"
    LEARNING = "Learning"
    REFLECTION = "Reflection"


WORDS_PER_MINUTE = 200

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10000
MAX_TAGS = 10
TAG_MAX_LENGTH = 30

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_SEARCH_LIMIT = 20
RECENT_ENTRIES_LIMIT = 5
STREAK_MAX_DAYS = 365
MONTHLY_ACTIVITY_MONTHS = 12

# Weighted text matching: hits in the title count most, tags least.
SEARCH_WEIGHTS = {"title": 10, "content": 5, "tags": 1}

# Public sort keys mapped to entry attributes.
SORT_FIELDS = {
    "date": "entry_date",
    "entry_date": "entry_date",
    "created_at": "created_at",
    "updated_at": "updated_at",
    "title": "title",
    "mood": "mood",
    "category": "category",
    "word_count": "word_count",
    "reading_time": "reading_time",
}
DEFAULT_SORT_FIELD = "date"
