"""Journal service functions against the SQLAlchemy store."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from daily_journal.core.errors import Conflict, ValidationFailed
from daily_journal.core.utils.validation import validate_payload
from daily_journal.domains.journal.events import (
    JOURNAL_ENTRY_CREATED,
    JOURNAL_ENTRY_DELETED,
    JOURNAL_ENTRY_UPDATED,
)
from daily_journal.domains.journal.schemas.journal_schemas import (
    EntryCreate,
    EntryListFilter,
    EntrySearchFilter,
    EntryUpdate,
)
from daily_journal.domains.journal.services import journal_service
from daily_journal.domains.journal.stores import InMemoryEntryStore

pytestmark = pytest.mark.integration


def _payload(**overrides) -> EntryCreate:
    data = {
        "title": "  My First Entry  ",
        "content": "This is the content of my journal entry.",
        "mood": "grateful",
        "category": "Reflection",
        "tags": [" morning ", "coffee"],
        "entry_date": "2024-01-05T08:30:00",
    }
    data.update(overrides)
    return validate_payload(EntryCreate, data)


# ==================== Create ====================


def test_create_entry_derives_fields_and_emits_event(app, user):
    with patch("daily_journal.domains.journal.services.journal_service.publish_event") as mock_publish:
        entry = journal_service.create_entry(user.id, _payload(word_count=500))

    assert entry.id is not None
    assert entry.title == "My First Entry"
    assert entry.tags == ["morning", "coffee"]
    assert entry.word_count == 8
    assert entry.reading_time == 1
    assert entry.version == 1
    assert entry.is_private is True
    assert entry.is_favorite is False
    mock_publish.assert_called_once()
    event_type, payload = mock_publish.call_args.args
    assert event_type == JOURNAL_ENTRY_CREATED
    assert payload["entry_id"] == entry.id
    assert payload["user_id"] == user.id


def test_create_entry_defaults_date_to_now(app, user):
    before = datetime.now()
    entry = journal_service.create_entry(user.id, _payload(entry_date=None))
    assert before <= entry.entry_date <= datetime.now()


def test_create_entry_converts_aware_dates_to_local(app, user):
    aware = datetime(2024, 1, 5, 12, tzinfo=timezone.utc)
    entry = journal_service.create_entry(user.id, _payload(entry_date=aware.isoformat()))
    assert entry.entry_date.tzinfo is None
    assert entry.entry_date == aware.astimezone().replace(tzinfo=None)


@pytest.mark.parametrize(
    "overrides",
    [
        {"content": ""},
        {"content": "   "},
        {"title": "   "},
        {"title": "x" * 201},
        {"content": "x" * 10001},
        {"mood": "joyful"},
        {"category": "Hobbies"},
        {"tags": [f"t{i}" for i in range(11)]},
        {"tags": ["x" * 31]},
        {"location": {"coordinates": {"latitude": 91}}},
        {"sentiment": {"score": 1.5}},
    ],
)
def test_create_entry_validation(app, overrides):
    with pytest.raises(ValidationFailed):
        _payload(**overrides)


def test_create_entry_keeps_optional_metadata(app, user):
    entry = journal_service.create_entry(
        user.id,
        _payload(
            location={"name": "Lisbon", "coordinates": {"latitude": 38.7, "longitude": -9.1}},
            weather={"condition": "sunny", "temperature": 24.5},
            sentiment={"score": 0.6, "magnitude": 1.2},
            attachments=[{"filename": "a.png", "mimetype": "image/png", "size": 10}],
        ),
    )
    fetched = journal_service.get_entry(user.id, entry.id)
    assert fetched.location == {"name": "Lisbon", "coordinates": {"latitude": 38.7, "longitude": -9.1}}
    assert fetched.weather == {"condition": "sunny", "temperature": 24.5}
    assert fetched.sentiment == {"score": 0.6, "magnitude": 1.2}
    assert fetched.attachments == [{"filename": "a.png", "mimetype": "image/png", "size": 10}]


# ==================== Update ====================


def test_update_entry_recomputes_and_bumps_version(app, user):
    entry = journal_service.create_entry(user.id, _payload())
    with patch("daily_journal.domains.journal.services.journal_service.publish_event") as mock_publish:
        updated = journal_service.update_entry(
            user.id,
            entry.id,
            validate_payload(EntryUpdate, {"content": "one two", "word_count": 99, "version": 1}),
        )
    assert updated.content == "one two"
    assert updated.word_count == 2
    assert updated.version == 2
    assert updated.title == "My First Entry"
    event_type, payload = mock_publish.call_args.args
    assert event_type == JOURNAL_ENTRY_UPDATED
    assert payload["fields"] == ["content"]


def test_update_with_stale_version_conflicts(app, user):
    entry = journal_service.create_entry(user.id, _payload())
    journal_service.update_entry(user.id, entry.id, validate_payload(EntryUpdate, {"title": "v2"}))
    with pytest.raises(Conflict) as exc:
        journal_service.update_entry(user.id, entry.id, validate_payload(EntryUpdate, {"title": "v3", "version": 1}))
    assert exc.value.field == "version"
    assert journal_service.get_entry(user.id, entry.id).title == "v2"


def test_update_rejects_clearing_required_fields(app):
    with pytest.raises(ValidationFailed):
        validate_payload(EntryUpdate, {"title": None})


def test_update_can_clear_optional_metadata(app, user):
    entry = journal_service.create_entry(user.id, _payload(weather={"condition": "rain"}))
    updated = journal_service.update_entry(user.id, entry.id, validate_payload(EntryUpdate, {"weather": None}))
    assert updated.weather is None


def test_update_other_users_entry_returns_none(app, user, other_user):
    entry = journal_service.create_entry(user.id, _payload())
    result = journal_service.update_entry(other_user.id, entry.id, validate_payload(EntryUpdate, {"title": "mine"}))
    assert result is None
    assert journal_service.get_entry(user.id, entry.id).title == "My First Entry"


# ==================== Favorite / delete ====================


def test_toggle_favorite_twice_restores_state(app, user):
    entry = journal_service.create_entry(user.id, _payload())
    assert journal_service.toggle_favorite(user.id, entry.id).is_favorite is True
    assert journal_service.toggle_favorite(user.id, entry.id).is_favorite is False
    assert journal_service.toggle_favorite(user.id, 9999) is None


def test_delete_entry(app, user, other_user):
    entry = journal_service.create_entry(user.id, _payload())
    assert journal_service.delete_entry(other_user.id, entry.id) is False
    with patch("daily_journal.domains.journal.services.journal_service.publish_event") as mock_publish:
        assert journal_service.delete_entry(user.id, entry.id) is True
    assert mock_publish.call_args.args[0] == JOURNAL_ENTRY_DELETED
    assert journal_service.get_entry(user.id, entry.id) is None
    assert journal_service.delete_entry(user.id, entry.id) is False


@pytest.mark.parametrize("raw", ["abc", "", "0", "-3", None, "1.5"])
def test_parse_entry_id_rejects_malformed(raw):
    with pytest.raises(ValidationFailed):
        journal_service.parse_entry_id(raw)


# ==================== List / search ====================


def _seed(user_id: int, store=None):
    rows = [
        ("Park walk", "A long walk in the park", "happy", "Health", "2024-01-05T07:00:00"),
        ("Standup", "talked about the park project", "calm", "Work", "2024-01-05T10:00:00"),
        ("Flight", "Left for Lisbon", "excited", "Travel", "2024-01-10T12:00:00"),
    ]
    for title, content, mood, category, when in rows:
        journal_service.create_entry(
            user_id,
            _payload(title=title, content=content, mood=mood, category=category, entry_date=when, tags=[]),
            store=store,
        )


def test_list_entries_filters_and_paginates(app, user, other_user):
    _seed(user.id)
    _seed(other_user.id)
    entries, pagination = journal_service.list_entries(
        user.id, validate_payload(EntryListFilter, {"end_date": "2024-01-05", "limit": "1"})
    )
    assert [e.title for e in entries] == ["Standup"]
    assert pagination == {
        "current_page": 1,
        "total_pages": 2,
        "total_entries": 2,
        "has_next": True,
        "has_prev": False,
    }


def test_list_entries_sorted_ascending(app, user):
    _seed(user.id)
    entries, _ = journal_service.list_entries(
        user.id, validate_payload(EntryListFilter, {"sort_by": "title", "sort_order": "asc"})
    )
    assert [e.title for e in entries] == ["Flight", "Park walk", "Standup"]


def test_sql_and_memory_stores_agree_on_search(app, user):
    memory = InMemoryEntryStore()
    _seed(user.id)
    _seed(user.id, store=memory)

    filters = validate_payload(EntryListFilter, {"search": "park"})
    sql_titles = [e.title for e in journal_service.list_entries(user.id, filters)[0]]
    mem_titles = [e.title for e in journal_service.list_entries(user.id, filters, store=memory)[0]]
    assert sql_titles == mem_titles == ["Park walk", "Standup"]


@pytest.mark.parametrize("q", ["café", "CAFÉ", "été"])
def test_sql_and_memory_stores_agree_on_non_ascii_search(app, user, q):
    memory = InMemoryEntryStore()
    for store in (None, memory):
        journal_service.create_entry(user.id, _payload(title="CAFÉ morning", tags=[]), store=store)
        journal_service.create_entry(
            user.id, _payload(title="Summer", content="Long days outside", tags=["été"]), store=store
        )

    filters = validate_payload(EntrySearchFilter, {"q": q})
    sql_result = journal_service.search_entries(user.id, filters)
    mem_result = journal_service.search_entries(user.id, filters, store=memory)
    assert sql_result["count"] == mem_result["count"] == 1
    assert sql_result["entries"][0]["title"] == mem_result["entries"][0]["title"]


def test_search_entries_projection(app, user, other_user):
    _seed(user.id)
    _seed(other_user.id)
    result = journal_service.search_entries(user.id, validate_payload(EntrySearchFilter, {"q": "PARK", "mood": "calm"}))
    assert result["count"] == 1
    assert result["query"] == "PARK"
    assert set(result["entries"][0]) == {
        "id",
        "title",
        "content",
        "mood",
        "category",
        "entry_date",
        "word_count",
        "is_favorite",
    }


def test_export_entries(app, user):
    _seed(user.id)
    export = journal_service.export_entries(user)
    assert export["user"] == {"name": "Test Writer", "email": "writer@example.com"}
    assert export["total_entries"] == 3
    assert [e["title"] for e in export["entries"]] == ["Flight", "Standup", "Park walk"]
