"""Event payload models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DomainEvent:
    event_type: str
    payload: dict
    user_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.now)
