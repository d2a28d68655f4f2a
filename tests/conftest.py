"""
Shared fixtures: an app bound to a throwaway SQLite file per test, a test
client, and helpers to register/log in users over HTTP.
"""

from datetime import date, timedelta

import pytest

from app import create_app
from config import Config
from models import db
from models.user import User
from security.password import hash_password


PASSWORD = "Str0ng!Pass"


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    BCRYPT_ROUNDS = 4
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False, "timeout": 30},
    }


@pytest.fixture
def app(tmp_path):
    class _Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + str(tmp_path / "test.db")

    app = create_app(_Config)
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    """db.session inside a pushed app context, for tests below the HTTP layer."""
    with app.app_context():
        yield db.session
        db.session.rollback()


def make_user(email: str, name: str = "Test User") -> int:
    """Insert a user directly; must run inside an app context."""
    user = User(email=email, password_hash=hash_password(PASSWORD), name=name)
    db.session.add(user)
    db.session.commit()
    return user.id


@pytest.fixture
def user_ids(session):
    return make_user("alice@example.com", "Alice"), make_user("bob@example.com", "Bob")


def register(client, email, password=PASSWORD, name="Test User"):
    return client.post("/register", json={"email": email, "password": password, "name": name})


def login_headers(client, email, password=PASSWORD):
    resp = client.post("/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    register(client, "alice@example.com", name="Alice")
    return login_headers(client, "alice@example.com")


@pytest.fixture
def other_headers(client):
    register(client, "bob@example.com", name="Bob")
    return login_headers(client, "bob@example.com")


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture
def yesterday():
    return date.today() - timedelta(days=1)
