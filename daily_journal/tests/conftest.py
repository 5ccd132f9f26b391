import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from daily_journal import create_app
from daily_journal.core.auth.auth_service import issue_tokens, register_user
from daily_journal.core.auth.schemas import RegisterRequest
from daily_journal.core.users.models import User
from daily_journal.domains.journal.models import JournalEntry
from daily_journal.domains.journal.services.lifecycle import apply_derived_fields
from daily_journal.domains.journal.stores import InMemoryEntryStore
from daily_journal.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app(tmp_path):
    """Per-test app backed by a fresh SQLite file."""
    app = create_app(
        "testing",
        overrides={"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'journal.db'}"},
    )
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        db.engine.dispose()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


def make_user(name: str = "Test Writer", email: str = "writer@example.com", password: str = "secret123") -> User:
    return register_user(RegisterRequest(name=name, email=email, password=password))["user"]


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_tokens(user)['access_token']}"}


@pytest.fixture()
def user(app):
    return make_user()


@pytest.fixture()
def other_user(app):
    return make_user(name="Other Writer", email="other@example.com")


@pytest.fixture()
def auth_headers(user):
    return bearer(user)


@pytest.fixture()
def other_headers(other_user):
    return bearer(other_user)


@pytest.fixture()
def memory_store():
    return InMemoryEntryStore()


def make_entry(
    user_id: int = 1,
    *,
    title: str = "An entry",
    content: str = "one two three",
    mood: str = "calm",
    category: str = "Personal",
    tags=None,
    entry_date: datetime | None = None,
    is_favorite: bool = False,
) -> JournalEntry:
    """Transient entry with derived fields applied, ready for a store."""
    entry = JournalEntry(
        user_id=user_id,
        title=title,
        content=content,
        mood=mood,
        category=category,
        tags=list(tags or []),
        entry_date=entry_date or datetime.now(),
        is_private=True,
        is_favorite=is_favorite,
        attachments=[],
        version=1,
    )
    return apply_derived_fields(entry)
