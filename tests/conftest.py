"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so the test environment goes first.
os.environ.update(
    {
        "DATABASE_URL": "sqlite://",
        "SECRET_KEY": "test-secret-key",
        "RESTRICTED_EMAILS": '["admin@mukha.com", "admin@it.com"]',
        "BOOTSTRAP_ADMIN_EMAILS": '["ops@mukha.dev"]',
        "FIRST_USER_IS_ADMIN": "true",
        "ACCESS_TOKEN_EXPIRE_MINUTES": "10080",
        "COOKIE_SECURE": "true",
        "COOKIE_SAMESITE": "none",
        "FRONTEND_DIST_DIR": "/nonexistent-frontend-dist",
    }
)
for key in ("SEED_ADMIN_EMAIL", "SEED_ADMIN_PASSWORD", "SEED_ADMIN_DISPLAY_NAME"):
    os.environ.pop(key, None)

import pytest
from fastapi.testclient import TestClient

from mukha.api.dependencies import get_generator
from mukha.api.errors import UpstreamFailure
from mukha.database.config import connection_engine as engine_module
from mukha.database.config.connection_engine import create_tables, metadata
from mukha.main import app as fastapi_app


# ============================================================================
# Fakes
# ============================================================================

class FakeGenerator:
    """Stands in for the hosted chat model."""

    def __init__(self, reply: str = "Hello from Mukha", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls = []

    async def generate(self, message, history, knowledge):
        self.calls.append({"message": message, "history": list(history), "knowledge": list(knowledge)})
        if self.fail:
            raise UpstreamFailure("provider unavailable")
        return self.reply


# ============================================================================
# Database
# ============================================================================

@pytest.fixture(autouse=True)
def reset_database():
    """Recreate all tables around every test."""
    engine = engine_module.connection_engine
    metadata.drop_all(bind=engine)
    create_tables(engine)
    yield
    metadata.drop_all(bind=engine)


# ============================================================================
# Application and clients
# ============================================================================

@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def app(generator):
    fastapi_app.dependency_overrides[get_generator] = lambda: generator
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def make_client(app):
    """Factory for independent clients; each keeps its own session cookie."""
    clients = []

    def _factory(**kwargs) -> TestClient:
        # https so the Secure session cookie is sent back
        client = TestClient(app, base_url="https://testserver", **kwargs)
        clients.append(client)
        return client

    yield _factory
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client()


def register(client: TestClient, email: str, password: str = "pw1", **extra):
    """Register through the API and return the response."""
    return client.post("/api/auth/register", json={"email": email, "password": password, **extra})


@pytest.fixture
def admin_client(make_client):
    """Client logged in as the first (therefore admin) user."""
    c = make_client()
    assert register(c, "a@x.com", "pw1").json()["user"]["isAdmin"] is True
    return c


@pytest.fixture
def user_client(make_client, admin_client):
    """Client logged in as a regular user (registered after the admin)."""
    c = make_client()
    assert register(c, "b@x.com", "pw2").json()["user"]["isAdmin"] is False
    return c
