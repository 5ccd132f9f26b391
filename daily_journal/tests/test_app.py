import pytest

from conftest import bearer, make_user
from daily_journal import create_app
from daily_journal.domains.journal.stores import InMemoryEntryStore, SqlAlchemyEntryStore
from daily_journal.extensions import db


@pytest.mark.integration
def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["status"] == "OK"


@pytest.mark.integration
def test_api_index_and_unknown_route(client):
    assert client.get("/api").get_json()["endpoints"]["entries"] == "/api/entries"
    resp = client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


@pytest.mark.integration
def test_default_store_is_sqlalchemy(app):
    assert isinstance(app.extensions["entry_store"], SqlAlchemyEntryStore)


@pytest.mark.integration
def test_memory_backend_serves_entries(tmp_path):
    app = create_app(
        "testing",
        overrides={
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'memory.db'}",
            "ENTRY_STORE_BACKEND": "memory",
        },
    )
    assert isinstance(app.extensions["entry_store"], InMemoryEntryStore)
    with app.app_context():
        db.create_all()
        try:
            headers = bearer(make_user())
            client = app.test_client()
            resp = client.post(
                "/api/entries",
                json={"title": "kept in memory", "content": "hello there", "mood": "calm", "category": "Work"},
                headers=headers,
            )
            assert resp.status_code == 201
            listed = client.get("/api/entries", headers=headers).get_json()
            assert [e["title"] for e in listed["entries"]] == ["kept in memory"]
            profile = client.get("/api/users/profile", headers=headers).get_json()
            assert profile["user"]["stats"]["total_entries"] == 1
        finally:
            db.session.remove()
            db.drop_all()
            db.engine.dispose()


@pytest.mark.unit
def test_unknown_backend_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        create_app(
            "testing",
            overrides={
                "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'x.db'}",
                "ENTRY_STORE_BACKEND": "redis",
            },
        )
