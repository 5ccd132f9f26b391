"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token, current_user, jwt_required

from daily_journal.core.auth.auth_service import authenticate_user, issue_tokens, register_user
from daily_journal.core.auth.schemas import RegisterRequest
from daily_journal.core.users.schemas import LoginRequest, serialize_user
from daily_journal.core.utils.validation import validate_payload
from daily_journal.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    data = validate_payload(RegisterRequest, request.get_json(silent=True) or {})
    result = register_user(data)
    user = result.pop("user")
    return (
        jsonify(
            {
                "ok": True,
                "message": "User registered successfully",
                "user": serialize_user(user).model_dump(mode="json"),
                **result,
            }
        ),
        201,
    )


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    data = validate_payload(LoginRequest, request.get_json(silent=True) or {})
    user = authenticate_user(data.email, data.password)
    return jsonify(
        {
            "ok": True,
            "message": "Login successful",
            **issue_tokens(user),
            "user": serialize_user(user).model_dump(mode="json"),
        }
    )


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
@limiter.limit("30/minute")
def refresh():
    new_access = create_access_token(identity=str(current_user.id))
    return jsonify({"ok": True, "access_token": new_access})


@auth_bp.get("/me")
@jwt_required()
def me():
    return jsonify({"ok": True, "user": serialize_user(current_user).model_dump(mode="json")})
