"""Authentication service layer."""

from __future__ import annotations

import logging

from flask_jwt_extended import create_access_token, create_refresh_token
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from daily_journal.core.auth.events import AUTH_USER_LOGGED_IN, AUTH_USER_REGISTERED
from daily_journal.core.auth.password import hash_password, verify_password
from daily_journal.core.auth.schemas import RegisterRequest
from daily_journal.core.errors import AuthorizationFailed, Conflict
from daily_journal.core.events.event_service import publish_event
from daily_journal.core.users.models import User
from daily_journal.extensions import db

logger = logging.getLogger(__name__)


def find_user_by_email(email: str) -> User | None:
    return User.query.filter(func.lower(User.email) == email.strip().lower()).first()


def authenticate_user(email: str, password: str) -> User:
    """Return the user if credentials are valid, else raise AuthorizationFailed."""
    user = find_user_by_email(email)
    if not user:
        raise AuthorizationFailed("Invalid email or password", code="invalid_credentials")
    if not user.is_active:
        raise AuthorizationFailed("Account is deactivated", code="account_deactivated")
    if not verify_password(password, user.password_hash):
        raise AuthorizationFailed("Invalid email or password", code="invalid_credentials")
    publish_event(AUTH_USER_LOGGED_IN, {"user_id": user.id}, user_id=user.id)
    return user


def issue_tokens(user: User) -> dict[str, str]:
    """Create access and refresh tokens for a user."""
    identity = str(user.id)
    return {
        "access_token": create_access_token(identity=identity),
        "refresh_token": create_refresh_token(identity=identity),
    }


def register_user(payload: RegisterRequest) -> dict:
    """Create a user and issue its first token pair."""
    if find_user_by_email(payload.email):
        raise Conflict("User with this email already exists", field="email")

    user = User(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        preferences={},
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        db.session.rollback()
        raise Conflict("User with this email already exists", field="email") from None

    logger.info("registered user %s", user.id)
    publish_event(
        AUTH_USER_REGISTERED,
        {"user_id": user.id, "email": user.email, "name": user.name},
        user_id=user.id,
    )
    return {"user": user, **issue_tokens(user)}
