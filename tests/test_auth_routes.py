"""
Registration, login and bearer-token enforcement over HTTP.
"""

import pytest
from sqlalchemy.exc import OperationalError

from conftest import PASSWORD, register, login_headers
from models import db
from models.audit_log import AuditLog
from models.user import User
from security.token import issue_token


class TestRegister:

    def test_register_success(self, client, app):
        resp = register(client, "Alice@Example.com ", name="Alice")

        assert resp.status_code == 201
        assert resp.get_json() == {"message": "User registered successfully"}
        with app.app_context():
            user = User.query.filter_by(email="alice@example.com").one()
            assert user.password_hash != PASSWORD
            assert user.name == "Alice"

    def test_duplicate_email_is_bad_request(self, client):
        register(client, "alice@example.com")
        resp = register(client, "alice@example.com")

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Email already exists"

    @pytest.mark.parametrize("payload", [
        {},
        {"email": "a@example.com", "password": PASSWORD},
        {"email": "a@example.com", "name": "Al"},
    ])
    def test_missing_fields(self, client, payload):
        resp = client.post("/register", json=payload)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "All fields are required"

    def test_invalid_email(self, client):
        resp = register(client, "not-an-email")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid email format"

    def test_weak_password(self, client):
        resp = register(client, "a@example.com", password="password")
        body = resp.get_json()

        assert resp.status_code == 400
        assert body["error"] == "Password does not meet policy"
        assert any("uppercase" in d for d in body["details"])

    @pytest.mark.parametrize("name", ["A", "x" * 51])
    def test_name_length(self, client, name):
        resp = register(client, "a@example.com", name=name)
        assert resp.status_code == 400
        assert "between 2 and 50" in resp.get_json()["error"]

    @pytest.mark.parametrize("body", [
        ["alice@example.com", PASSWORD, "Alice"],
        "alice@example.com",
        {"email": 5, "password": PASSWORD, "name": "Alice"},
        {"email": "alice@example.com", "password": ["x"], "name": "Alice"},
        {"email": "alice@example.com", "password": PASSWORD, "name": {"first": "Alice"}},
    ])
    def test_malformed_body_is_bad_request(self, client, body):
        resp = client.post("/register", json=body)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "All fields are required"


class TestLogin:

    def test_login_returns_token(self, client):
        register(client, "alice@example.com")
        resp = client.post("/login", json={"email": "alice@example.com", "password": PASSWORD})

        assert resp.status_code == 200
        assert isinstance(resp.get_json()["token"], str)

    def test_wrong_password(self, client):
        register(client, "alice@example.com")
        resp = client.post("/login", json={"email": "alice@example.com", "password": "Wr0ng!Pass"})

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, client):
        resp = client.post("/login", json={"email": "ghost@example.com", "password": PASSWORD})
        assert resp.status_code == 401

    def test_login_events_are_audited(self, client, app):
        register(client, "alice@example.com")
        login_headers(client, "alice@example.com")
        client.post("/login", json={"email": "alice@example.com", "password": "nope"})

        with app.app_context():
            actions = [row.action for row in AuditLog.query.order_by(AuditLog.id).all()]
        assert actions == ["REGISTER_SUCCESS", "LOGIN_SUCCESS", "LOGIN_FAIL"]

    @pytest.mark.parametrize("body", [
        ["alice@example.com", PASSWORD],
        {"email": ["alice@example.com"], "password": PASSWORD},
        {"email": "alice@example.com", "password": 12345678},
    ])
    def test_malformed_body_is_rejected(self, client, body):
        register(client, "alice@example.com")
        resp = client.post("/login", json=body)

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Invalid credentials"}


class TestBearerAuth:

    def test_missing_header_is_401(self, client):
        resp = client.get("/appointments")
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Access denied"}

    def test_non_bearer_scheme_is_401(self, client):
        resp = client.get("/appointments", headers={"Authorization": "Basic abc"})
        assert resp.status_code == 401

    def test_tampered_token_is_403(self, client, auth_headers):
        headers = {"Authorization": auth_headers["Authorization"] + "x"}
        resp = client.get("/appointments", headers=headers)

        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Invalid token"}

    def test_expired_token_is_403(self, client, app, auth_headers):
        app.config["TOKEN_LIFETIME_SECONDS"] = -1
        resp = client.get("/appointments", headers=auth_headers)
        assert resp.status_code == 403

    def test_token_for_unknown_user_is_403(self, client, app):
        with app.test_request_context():
            token = issue_token(424242, "ghost@example.com")
        resp = client.get("/appointments", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403

    def test_valid_token_is_accepted(self, client, auth_headers):
        resp = client.get("/appointments", headers=auth_headers)
        assert resp.status_code == 200

    def test_user_lookup_failure_is_500(self, client, auth_headers, monkeypatch):
        def locked(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(db.session, "get", locked)
        resp = client.get("/appointments", headers=auth_headers)

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Server error"}


def test_health_and_security_headers(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert "default-src 'none'" in resp.headers["Content-Security-Policy"]
    assert resp.headers["Cache-Control"] == "no-store"
