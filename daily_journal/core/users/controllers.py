"""User profile and dashboard API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from daily_journal.core.users.schemas import ProfileUpdateRequest, serialize_user
from daily_journal.core.users.services import update_profile
from daily_journal.core.utils.validation import validate_payload
from daily_journal.domains.journal.services.aggregation import dashboard_view

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.get("/profile")
@jwt_required()
def get_profile():
    return jsonify({"ok": True, "user": serialize_user(current_user).model_dump(mode="json")})


@user_api_bp.put("/profile")
@jwt_required()
def put_profile():
    data = validate_payload(ProfileUpdateRequest, request.get_json(silent=True) or {})
    user = update_profile(current_user, data)
    return jsonify(
        {
            "ok": True,
            "message": "Profile updated successfully",
            "user": serialize_user(user).model_dump(mode="json"),
        }
    )


@user_api_bp.get("/dashboard")
@jwt_required()
def dashboard():
    return jsonify({"ok": True, **dashboard_view(current_user)})
