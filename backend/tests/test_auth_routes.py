"""
Authentication API tests.
"""

from marketplace.models import PasswordResetToken, SecurityEvent
from marketplace.services.password_reset_service import GENERIC_RESET_MESSAGE


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def get_auth_token(client, email: str, password: str):
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    return resp.json.get("token") if resp.status_code == 200 else None


class TestRegisterAndLogin:

    def test_register_returns_token(self, client, db_session):
        resp = client.post("/api/auth/register", json={
            "email": "New@Example.com", "password": "secret123", "firstName": "Nia",
        })
        assert resp.status_code == 201
        assert resp.json["user"]["email"] == "new@example.com"
        assert resp.json["user"]["first_name"] == "Nia"
        assert resp.json["user"]["role"] == "user"

        me = client.get("/api/auth/me", headers=auth_headers(resp.json["token"]))
        assert me.status_code == 200
        assert me.json["user"]["email"] == "new@example.com"

    def test_duplicate_email_conflict(self, client, user):
        resp = client.post("/api/auth/register", json={"email": user.email, "password": "secret123"})
        assert resp.status_code == 409
        assert resp.json["error"] == "User already exists with this email"

    def test_short_password(self, client, db_session):
        resp = client.post("/api/auth/register", json={"email": "x@example.com", "password": "abc"})
        assert resp.status_code == 400

    def test_invalid_email(self, client, db_session):
        resp = client.post("/api/auth/register", json={"email": "nope", "password": "secret123"})
        assert resp.status_code == 400

    def test_login(self, client, user):
        token = get_auth_token(client, user.email, "secret123")
        assert token

    def test_bad_password_logs_event(self, client, user, db_session):
        resp = client.post("/api/auth/login", json={"email": user.email, "password": "wrong-password"})
        assert resp.status_code == 401
        assert resp.json["error"] == "Invalid email or password"
        assert db_session.query(SecurityEvent).filter_by(event_type="LOGIN_FAILED").count() == 1

    def test_inactive_account(self, client, user, db_session):
        user.is_active = False
        db_session.commit()
        resp = client.post("/api/auth/login", json={"email": user.email, "password": "secret123"})
        assert resp.status_code == 401

    def test_missing_fields(self, client, db_session):
        assert client.post("/api/auth/login", json={"email": "a@example.com"}).status_code == 400

    def test_non_string_credentials(self, client, user):
        assert client.post("/api/auth/login", json={"email": 123, "password": "secret123"}).status_code == 400
        assert client.post("/api/auth/login", json={"email": user.email, "password": ["x"]}).status_code == 400

    def test_logout_revokes_token(self, client, user):
        token = get_auth_token(client, user.email, "secret123")
        assert client.post("/api/auth/logout", headers=auth_headers(token)).status_code == 200
        assert client.get("/api/auth/me", headers=auth_headers(token)).status_code == 401

    def test_me_requires_token(self, client, db_session):
        assert client.get("/api/auth/me").status_code == 401
        assert client.get("/api/auth/me", headers=auth_headers("garbage")).status_code == 401


class TestForgotPassword:

    def test_same_response_for_known_and_unknown(self, client, user):
        known = client.post("/api/auth/forgot-password", json={"email": user.email})
        unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json == unknown.json == {"message": GENERIC_RESET_MESSAGE}

    def test_token_issued_even_though_email_not_configured(self, client, user, db_session):
        client.post("/api/auth/forgot-password", json={"email": user.email})
        assert db_session.query(PasswordResetToken).count() == 1

    def test_requires_email(self, client, db_session):
        assert client.post("/api/auth/forgot-password", json={}).status_code == 400

    def test_fallback_link_then_reset(self, app, client, user):
        app.config["PASSWORD_RESET_INSECURE_LINK_FALLBACK"] = True
        try:
            resp = client.post("/api/auth/forgot-password", json={"email": user.email})
        finally:
            app.config["PASSWORD_RESET_INSECURE_LINK_FALLBACK"] = False

        token = resp.json["token"]
        assert resp.json["resetLink"].endswith(token)

        ok = client.post("/api/auth/reset-password", json={"token": token, "password": "brandnew1"})
        assert ok.status_code == 200

        again = client.post("/api/auth/reset-password", json={"token": token, "password": "brandnew2"})
        assert again.status_code == 400
        assert again.json["error"] == "Invalid or expired reset token"

        assert get_auth_token(client, user.email, "brandnew1")

    def test_reset_with_unknown_token(self, client, db_session):
        resp = client.post("/api/auth/reset-password", json={"token": "nope", "password": "brandnew1"})
        assert resp.status_code == 400
        assert resp.json["error"] == "Invalid or expired reset token"
