"""User service layer."""

from __future__ import annotations

from typing import Optional

from daily_journal.core.users.models import User
from daily_journal.core.users.preferences import set_preferences
from daily_journal.core.users.schemas import ProfileUpdateRequest
from daily_journal.extensions import db


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def list_user_ids(active_only: bool = True) -> list[int]:
    query = db.session.query(User.id)
    if active_only:
        query = query.filter(User.is_active.is_(True))
    return [row[0] for row in query.order_by(User.id).all()]


def update_profile(user: User, payload: ProfileUpdateRequest) -> User:
    if payload.name is not None:
        user.name = payload.name
    if payload.preferences is not None:
        values = payload.preferences.model_dump(exclude_none=True)
        if values:
            set_preferences(user, values)
    db.session.commit()
    return user
