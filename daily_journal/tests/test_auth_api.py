from __future__ import annotations

from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from daily_journal.core.auth.password import hash_password
from daily_journal.core.users.models import User
from daily_journal.extensions import db

pytestmark = pytest.mark.integration


def _register(client, **overrides):
    payload = {"name": "  Ada Writer ", "email": "Ada@Example.com", "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_returns_user_and_tokens(client):
    resp = _register(client)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["ok"] is True
    assert body["user"]["name"] == "Ada Writer"
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["preferences"] == {"theme": "light", "default_mood": "neutral", "default_category": "Personal"}
    assert body["user"]["stats"]["total_entries"] == 0
    assert body["access_token"] and body["refresh_token"]
    assert "password_hash" not in body["user"]


def test_register_duplicate_email_is_conflict(client):
    _register(client)
    resp = _register(client, email="ADA@example.com")
    assert resp.status_code == 409
    body = resp.get_json()
    assert body["error"] == "conflict"
    assert body["field"] == "email"


@pytest.mark.parametrize(
    "overrides",
    [{"name": "A"}, {"name": "x" * 51}, {"password": "12345"}, {"password": "x" * 129}, {"email": "not-an-email"}],
)
def test_register_validation(client, overrides):
    resp = _register(client, **overrides)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_login_and_me(client):
    _register(client)
    resp = client.post("/api/auth/login", json={"email": "ADA@example.com", "password": "secret123"})
    assert resp.status_code == 200
    token = resp.get_json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["user"]["email"] == "ada@example.com"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "ada@example.com", "password": "wrong-password"},
        {"email": "nobody@example.com", "password": "secret123"},
    ],
)
def test_login_invalid_credentials(client, payload):
    _register(client)
    resp = client.post("/api/auth/login", json=payload)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "invalid_credentials"


def test_login_deactivated_account(app, client):
    db.session.add(
        User(name="Gone", email="gone@example.com", password_hash=hash_password("secret123"), is_active=False)
    )
    db.session.commit()
    resp = client.post("/api/auth/login", json={"email": "gone@example.com", "password": "secret123"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "account_deactivated"


def test_token_for_deactivated_user_is_rejected(client, user, auth_headers):
    user.is_active = False
    db.session.commit()
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "account_deactivated"


def test_token_for_missing_user_is_rejected(app, client):
    token = create_access_token(identity="4242")
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "user_not_found"


def test_expired_token(app, client, user):
    token = create_access_token(identity=str(user.id), expires_delta=timedelta(seconds=-1))
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "token_expired"


def test_refresh_issues_new_access_token(client):
    refresh_token = _register(client).get_json()["refresh_token"]
    resp = client.post("/api/auth/refresh", headers={"Authorization": f"Bearer {refresh_token}"})
    assert resp.status_code == 200
    assert resp.get_json()["access_token"]


def test_access_token_cannot_refresh(client, auth_headers):
    resp = client.post("/api/auth/refresh", headers=auth_headers)
    assert resp.status_code == 401
