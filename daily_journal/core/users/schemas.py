"""Typed schemas for user IO."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Literal, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from daily_journal.core.users.preferences import get_preferences
from daily_journal.domains.journal.constants import Category, Mood

if TYPE_CHECKING:
    from daily_journal.core.users.models import User


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class PreferencesUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    theme: Optional[Literal["light", "dark", "auto"]] = None
    default_mood: Optional[Mood] = None
    default_category: Optional[Category] = None


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    preferences: Optional[PreferencesUpdate] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class UserStats(BaseModel):
    total_entries: int = 0
    total_words: int = 0
    streak: int = 0
    last_entry_date: Optional[str] = None


class UserResponse(BaseModel):
    # Response should not re-validate persisted emails (demo domains, etc.)
    id: int
    name: str
    email: str
    is_active: bool
    preferences: Dict[str, Any] = {}
    stats: UserStats
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> "UserResponse":
    """Build a UserResponse with merged preferences and the stats snapshot."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        is_active=user.is_active,
        preferences=get_preferences(user),
        stats=UserStats(**user.stats),
        created_at=user.created_at,
    )
