"""
Authentication endpoint tests.

Run with: pytest tests/test_auth.py -v
"""

from conftest import register


def _cookie_attributes(header: str):
    """Split a Set-Cookie header into its name=value pair and lower-cased attributes."""
    pair, *parts = [part.strip() for part in header.split(";")]
    attributes = {}
    for part in parts:
        key, _, value = part.partition("=")
        attributes[key.lower()] = value.lower()
    return pair, attributes


class TestRegister:
    """Registration and the admin bootstrap rules."""

    def test_first_user_is_admin_second_is_not(self, make_client):
        first = register(make_client(), "a@x.com", "pw1")
        second = register(make_client(), "b@x.com", "pw2")

        assert first.status_code == 200
        assert first.json()["user"]["isAdmin"] is True
        assert second.status_code == 200
        assert second.json()["user"]["isAdmin"] is False

    def test_register_returns_public_user_and_cookie(self, client):
        response = register(client, "A@X.com ", "pw1", displayName="Anna")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["email"] == "a@x.com"
        assert user["displayName"] == "Anna"
        assert "password" not in user
        assert "token" in response.cookies

    def test_duplicate_email_conflicts(self, make_client):
        assert register(make_client(), "a@x.com").status_code == 200

        response = register(make_client(), "a@x.com", "other")

        assert response.status_code == 400
        assert response.json() == {"error": "User already exists"}

    def test_duplicate_check_ignores_case(self, make_client):
        register(make_client(), "a@x.com")
        assert register(make_client(), "A@X.COM").status_code == 400

    def test_missing_credentials(self, client):
        assert client.post("/api/auth/register", json={"email": "a@x.com"}).status_code == 400
        assert client.post("/api/auth/register", json={"password": "pw"}).status_code == 400
        response = client.post("/api/auth/register", json={"email": "  ", "password": "pw"})
        assert response.json() == {"error": "Email and password required"}

    def test_restricted_email_is_forbidden(self, client):
        response = register(client, "Admin@Mukha.com", "pw")

        assert response.status_code == 403
        assert "error" in response.json()

    def test_bootstrap_admin_email_is_admin_even_when_not_first(self, make_client):
        register(make_client(), "a@x.com")

        response = register(make_client(), "ops@mukha.dev")

        assert response.json()["user"]["isAdmin"] is True

    def test_display_name_too_long(self, client):
        response = register(client, "a@x.com", displayName="abcdefghijklm")
        assert response.status_code == 400

    def test_display_name_bad_characters(self, client):
        response = register(client, "a@x.com", displayName="bad name!")
        assert response.status_code == 400

    def test_display_name_with_apostrophe(self, client):
        response = register(client, "a@x.com", displayName="O'Neil12")
        assert response.status_code == 200
        assert response.json()["user"]["displayName"] == "O'Neil12"

    def test_display_name_trailing_newline(self, client):
        response = register(client, "a@x.com", displayName="Anna\n")
        assert response.status_code == 400

    def test_password_over_72_bytes_rejected(self, make_client):
        response = register(make_client(), "a@x.com", "p" * 80)

        assert response.status_code == 400
        assert response.json() == {"error": "Password must be at most 72 bytes"}
        assert make_client().post(
            "/api/auth/login", json={"email": "a@x.com", "password": "p" * 80}
        ).status_code == 401

    def test_session_cookie_attributes(self, client):
        response = register(client, "a@x.com", "pw1")

        pair, attributes = _cookie_attributes(response.headers["set-cookie"])

        assert pair.startswith("token=")
        assert "httponly" in attributes
        assert "secure" in attributes
        assert attributes["samesite"] == "none"
        assert attributes["max-age"] == "604800"
        assert attributes["path"] == "/"


class TestSession:
    """Login, logout and the current-user endpoint."""

    def test_login_sets_session_cookie(self, make_client):
        register(make_client(), "a@x.com", "pw1")

        response = make_client().post("/api/auth/login", json={"email": "a@x.com", "password": "pw1"})

        _, attributes = _cookie_attributes(response.headers["set-cookie"])
        assert "httponly" in attributes
        assert "secure" in attributes
        assert attributes["max-age"] == "604800"

    def test_logout_expires_cookie(self, client):
        register(client, "a@x.com", "pw1")

        response = client.post("/api/auth/logout")

        pair, attributes = _cookie_attributes(response.headers["set-cookie"])
        assert pair in ("token=", 'token=""')
        assert attributes["max-age"] == "0"
        assert attributes["path"] == "/"

    def test_me_with_registration_cookie(self, client):
        register(client, "a@x.com", "pw1")

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "a@x.com"
        assert response.json()["user"]["isAdmin"] is True

    def test_logout_clears_session(self, client):
        register(client, "a@x.com", "pw1")
        assert client.get("/api/auth/me").status_code == 200

        assert client.post("/api/auth/logout").status_code == 200
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_logout_without_session_succeeds(self, client):
        assert client.post("/api/auth/logout").status_code == 200

    def test_login_issues_fresh_session(self, make_client):
        register(make_client(), "a@x.com", "pw1")
        c = make_client()

        response = c.post("/api/auth/login", json={"email": "a@x.com", "password": "pw1"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "a@x.com"
        assert c.get("/api/auth/me").status_code == 200

    def test_login_wrong_password(self, make_client):
        register(make_client(), "a@x.com", "pw1")

        response = make_client().post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_login_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "pw"})
        assert response.status_code == 401

    def test_me_without_cookie(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_me_with_forged_cookie(self, make_client):
        c = make_client(cookies={"token": "not.a.jwt"})
        response = c.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}


class TestUpdateProfile:
    """Self-service profile updates."""

    def test_update_display_name_only(self, client):
        register(client, "a@x.com", "pw1", displayName="Anna")

        response = client.post("/api/auth/update-profile", json={"displayName": "Annie"})

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["displayName"] == "Annie"
        assert user["email"] == "a@x.com"

    def test_update_email_and_password(self, make_client):
        c = make_client()
        register(c, "a@x.com", "pw1")

        response = c.post("/api/auth/update-profile", json={"email": "new@x.com", "password": "pw9"})
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "new@x.com"

        # existing session keeps working; the token is not re-issued
        assert c.get("/api/auth/me").json()["user"]["email"] == "new@x.com"

        fresh = make_client()
        assert fresh.post("/api/auth/login", json={"email": "a@x.com", "password": "pw1"}).status_code == 401
        assert fresh.post("/api/auth/login", json={"email": "new@x.com", "password": "pw1"}).status_code == 401
        assert fresh.post("/api/auth/login", json={"email": "new@x.com", "password": "pw9"}).status_code == 200

    def test_invalid_display_name_rejected(self, client):
        register(client, "a@x.com")

        response = client.post("/api/auth/update-profile", json={"displayName": "waytoolongname"})

        assert response.status_code == 400
        assert client.get("/api/auth/me").json()["user"]["displayName"] is None

    def test_display_name_trailing_newline_rejected(self, client):
        register(client, "a@x.com", displayName="Bob")

        response = client.post("/api/auth/update-profile", json={"displayName": "Bob\n"})

        assert response.status_code == 400
        assert client.get("/api/auth/me").json()["user"]["displayName"] == "Bob"

    def test_empty_display_name_clears_it(self, client):
        register(client, "a@x.com", displayName="Anna")

        response = client.post("/api/auth/update-profile", json={"displayName": ""})

        assert response.status_code == 200
        assert response.json()["user"]["displayName"] is None
        assert client.get("/api/auth/me").json()["user"]["displayName"] is None

    def test_password_over_72_bytes_rejected(self, make_client):
        c = make_client()
        register(c, "a@x.com", "pw1")

        response = c.post("/api/auth/update-profile", json={"password": "p" * 80})

        assert response.status_code == 400
        assert make_client().post("/api/auth/login", json={"email": "a@x.com", "password": "pw1"}).status_code == 200

    def test_email_taken_by_someone_else(self, make_client):
        register(make_client(), "a@x.com")
        c = make_client()
        register(c, "b@x.com")

        response = c.post("/api/auth/update-profile", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email already in use"}

    def test_restricted_email_rejected(self, client):
        register(client, "a@x.com")
        response = client.post("/api/auth/update-profile", json={"email": "admin@it.com"})
        assert response.status_code == 403

    def test_requires_session(self, client):
        response = client.post("/api/auth/update-profile", json={"displayName": "Anna"})
        assert response.status_code == 401
