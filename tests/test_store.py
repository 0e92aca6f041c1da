"""
Service-layer tests: operator seeding, transactions and running without a store.
"""

import pytest

from mukha.api.errors import ConflictError, NotFoundError, StoreUnavailableError
from mukha.database.config import connection_engine as engine_module
from mukha.database.core import funcs
from mukha.database.core.policy import AccountPolicy


class TestSeedAdmin:
    """The idempotent operator seeding operation."""

    def test_creates_admin(self):
        result = funcs.seed_admin(email="Ops@Mukha.dev", password="secret", display_name="Ops")

        assert result["created"] is True
        assert result["user"]["email"] == "ops@mukha.dev"
        assert result["user"]["isAdmin"] is True
        assert funcs.login_user(email="ops@mukha.dev", password="secret")["isAdmin"] is True

    def test_is_idempotent(self):
        funcs.seed_admin(email="ops@mukha.dev", password="secret")
        again = funcs.seed_admin(email="ops@mukha.dev", password="secret")

        assert again["created"] is False
        assert again["user"]["isAdmin"] is True

    def test_promotes_existing_user_and_resets_password(self):
        policy = AccountPolicy.create(first_user_is_admin=False)
        user = funcs.register_user(email="boss@x.com", password="old", policy=policy)
        assert user["isAdmin"] is False

        result = funcs.seed_admin(email="boss@x.com", password="new")

        assert result["created"] is False
        assert funcs.is_admin_user(user_id=user["id"]) is True
        assert funcs.login_user(email="boss@x.com", password="new")["id"] == user["id"]


class TestServices:
    """Direct calls into the transactional service functions."""

    def test_failed_registration_rolls_back(self):
        funcs.register_user(email="a@x.com", password="pw")
        with pytest.raises(ConflictError):
            funcs.register_user(email="a@x.com", password="pw")
        assert funcs.login_user(email="a@x.com", password="pw")["email"] == "a@x.com"

    def test_profile_of_unknown_user(self):
        with pytest.raises(NotFoundError):
            funcs.get_user_profile(user_id="00000000-0000-0000-0000-000000000000")
        with pytest.raises(NotFoundError):
            funcs.get_user_profile(user_id="garbage")

    def test_is_admin_user_unknown(self):
        assert funcs.is_admin_user(user_id="garbage") is False

    def test_clear_returns_count(self):
        user = funcs.register_user(email="a@x.com", password="pw")
        funcs.create_message(user_id=user["id"], role="user", text="one")
        funcs.create_message(user_id=user["id"], role="model", text="two")

        assert funcs.clear_user_messages(user_id=user["id"]) == 2
        assert funcs.get_user_messages(user_id=user["id"]) == []


class TestWithoutStore:
    """Behaviour when no DATABASE_URL is configured."""

    @pytest.fixture
    def no_engine(self, monkeypatch):
        monkeypatch.setattr(engine_module, "connection_engine", None)

    def test_service_raises(self, no_engine):
        with pytest.raises(StoreUnavailableError):
            funcs.list_knowledge()

    def test_api_answers_503(self, no_engine, client):
        response = client.post("/api/auth/register", json={"email": "a@x.com", "password": "pw"})

        assert response.status_code == 503
        assert response.json() == {"error": "Database is not configured"}

    def test_health_reports_missing_database(self, no_engine, client):
        assert client.get("/api/health").json() == {"status": "ok", "database": False}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok", "database": True}
