"""Journal JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required

from daily_journal.core.errors import NotFound
from daily_journal.core.utils.validation import validate_payload
from daily_journal.domains.journal.mappers import map_entry
from daily_journal.domains.journal.schemas.journal_schemas import (
    EntryCreate,
    EntryListFilter,
    EntrySearchFilter,
    EntryUpdate,
)
from daily_journal.domains.journal.services import aggregation, journal_service

journal_api_bp = Blueprint("journal_api", __name__)


def _entry_or_404(entry):
    if not entry:
        raise NotFound("Entry not found")
    return entry


@journal_api_bp.get("")
@jwt_required()
def list_entries():
    filters = validate_payload(EntryListFilter, request.args.to_dict())
    entries, pagination = journal_service.list_entries(current_user.id, filters)
    return jsonify({"ok": True, "entries": [map_entry(e) for e in entries], "pagination": pagination})


@journal_api_bp.post("")
@jwt_required()
def create_entry():
    data = validate_payload(EntryCreate, request.get_json(silent=True) or {})
    entry = journal_service.create_entry(current_user.id, data)
    return jsonify({"ok": True, "message": "Entry created successfully", "entry": map_entry(entry)}), 201


@journal_api_bp.get("/search")
@jwt_required()
def search_entries():
    filters = validate_payload(EntrySearchFilter, request.args.to_dict())
    result = journal_service.search_entries(current_user.id, filters)
    return jsonify({"ok": True, **result})


@journal_api_bp.get("/calendar/<year>/<month>")
@jwt_required()
def calendar_month(year: str, month: str):
    return jsonify({"ok": True, **aggregation.calendar_view(current_user.id, year, month)})


@journal_api_bp.get("/stats/summary")
@jwt_required()
def stats_summary():
    return jsonify({"ok": True, **aggregation.summary_statistics(current_user)})


@journal_api_bp.get("/export/json")
@jwt_required()
def export_json():
    payload = journal_service.export_entries(current_user)
    resp = jsonify({"ok": True, **payload})
    filename = f"journal-export-{payload['export_date'][:10]}.json"
    resp.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp


@journal_api_bp.get("/<entry_id>")
@jwt_required()
def get_entry(entry_id: str):
    entry_pk = journal_service.parse_entry_id(entry_id)
    entry = _entry_or_404(journal_service.get_entry(current_user.id, entry_pk))
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.route("/<entry_id>", methods=["PUT", "PATCH"])
@jwt_required()
def update_entry(entry_id: str):
    entry_pk = journal_service.parse_entry_id(entry_id)
    data = validate_payload(EntryUpdate, request.get_json(silent=True) or {})
    entry = _entry_or_404(journal_service.update_entry(current_user.id, entry_pk, data))
    return jsonify({"ok": True, "message": "Entry updated successfully", "entry": map_entry(entry)})


@journal_api_bp.patch("/<entry_id>/favorite")
@jwt_required()
def toggle_favorite(entry_id: str):
    entry_pk = journal_service.parse_entry_id(entry_id)
    entry = _entry_or_404(journal_service.toggle_favorite(current_user.id, entry_pk))
    state = "added to" if entry.is_favorite else "removed from"
    return jsonify({"ok": True, "message": f"Entry {state} favorites", "entry": map_entry(entry)})


@journal_api_bp.delete("/<entry_id>")
@jwt_required()
def delete_entry(entry_id: str):
    entry_pk = journal_service.parse_entry_id(entry_id)
    if not journal_service.delete_entry(current_user.id, entry_pk):
        raise NotFound("Entry not found")
    return jsonify({"ok": True, "message": "Entry deleted successfully"})
