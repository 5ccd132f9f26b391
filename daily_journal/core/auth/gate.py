"""Bearer-token gate: resolve JWT identities into active users."""

from __future__ import annotations

import logging

from flask import jsonify
from flask_jwt_extended import JWTManager

from daily_journal.core.errors import AuthorizationFailed
from daily_journal.core.users.models import User
from daily_journal.extensions import db

logger = logging.getLogger(__name__)


def _user_id_from_sub(sub) -> int | None:
    try:
        return int(sub)
    except (TypeError, ValueError):
        return None


def _auth_error(code: str, message: str):
    return jsonify(AuthorizationFailed(message, code=code).to_dict()), 401


def register_auth_gate(jwt: JWTManager) -> None:
    @jwt.user_lookup_loader
    def _load_user(_jwt_header, jwt_data):
        user_id = _user_id_from_sub(jwt_data.get("sub"))
        if user_id is None:
            return None
        user = db.session.get(User, user_id)
        if user is None or not user.is_active:
            return None
        return user

    @jwt.user_lookup_error_loader
    def _user_lookup_failed(_jwt_header, jwt_data):
        user_id = _user_id_from_sub(jwt_data.get("sub"))
        user = db.session.get(User, user_id) if user_id is not None else None
        if user is not None and not user.is_active:
            return _auth_error("account_deactivated", "Account is deactivated")
        logger.info("token for unknown user %r rejected", jwt_data.get("sub"))
        return _auth_error("user_not_found", "User not found")

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _auth_error("unauthorized", reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _auth_error("invalid_token", reason)

    @jwt.expired_token_loader
    def _expired_token(_jwt_header, _jwt_data):
        return _auth_error("token_expired", "Token has expired")
