"""
Password reset tests.

Verifies:
- Unknown emails issue nothing
- Tokens are stored hashed, expire, and work once
- A failed email never blocks issuance
- The raw link is only handed back when the insecure fallback is on
"""

from datetime import timedelta

import pytest

from marketplace.models import PasswordResetToken
from marketplace.services import auth_service, password_reset_service, session_service
from marketplace.services.auth_service import PasswordValidationError
from marketplace.services.password_reset_service import InvalidResetTokenError


def capture_sender(outbox, result=True):
    def _send(email, link):
        outbox.append((email, link))
        return result
    return _send


def token_from_link(link: str) -> str:
    return link.split("token=", 1)[1]


class TestRequestReset:

    def test_unknown_email_issues_nothing(self, db_session):
        outbox = []
        result = password_reset_service.request_password_reset("nobody@example.com", sender=capture_sender(outbox))
        assert result.token_issued is False
        assert outbox == []
        assert db_session.query(PasswordResetToken).count() == 0

    def test_known_email_issues_hashed_token(self, db_session, user):
        outbox = []
        result = password_reset_service.request_password_reset(user.email, sender=capture_sender(outbox))

        assert result.token_issued and result.email_sent
        assert result.reset_link is None
        [(email, link)] = outbox
        assert email == user.email
        assert link.startswith("http://testserver/reset-password?token=")

        record = db_session.query(PasswordResetToken).one()
        assert record.token_hash == session_service.hash_token(token_from_link(link))
        assert record.token_hash != token_from_link(link)
        assert record.used is False

    def test_email_is_case_insensitive(self, db_session, user):
        outbox = []
        password_reset_service.request_password_reset("  SELLER@example.com ", sender=capture_sender(outbox))
        assert len(outbox) == 1

    def test_failed_send_still_issues_token(self, db_session, user):
        result = password_reset_service.request_password_reset(user.email, sender=capture_sender([], result=False))
        assert result.token_issued is True
        assert result.email_sent is False
        assert result.reset_link is None
        assert db_session.query(PasswordResetToken).count() == 1

    def test_sender_exception_is_treated_as_failure(self, db_session, user):
        def boom(email, link):
            raise RuntimeError("smtp down")

        result = password_reset_service.request_password_reset(user.email, sender=boom)
        assert result.token_issued is True
        assert result.email_sent is False

    def test_insecure_fallback_returns_link(self, app, db_session, user):
        app.config["PASSWORD_RESET_INSECURE_LINK_FALLBACK"] = True
        try:
            result = password_reset_service.request_password_reset(
                user.email, sender=capture_sender([], result=False)
            )
        finally:
            app.config["PASSWORD_RESET_INSECURE_LINK_FALLBACK"] = False

        assert result.reset_link is not None
        assert result.token == token_from_link(result.reset_link)


class TestResetPassword:

    def _issue(self, user):
        outbox = []
        password_reset_service.request_password_reset(user.email, sender=capture_sender(outbox))
        return token_from_link(outbox[0][1])

    def test_reset_changes_password_and_marks_used(self, db_session, user):
        token = self._issue(user)
        password_reset_service.reset_password(token, "brandnew1")

        assert auth_service.authenticate(user.email, "brandnew1").id == user.id
        record = db_session.query(PasswordResetToken).one()
        assert record.used is True
        assert record.used_at is not None

    def test_token_is_single_use(self, db_session, user):
        token = self._issue(user)
        password_reset_service.reset_password(token, "brandnew1")
        with pytest.raises(InvalidResetTokenError, match="Invalid or expired reset token"):
            password_reset_service.reset_password(token, "another1")

    def test_expired_token(self, db_session, user):
        token = self._issue(user)
        record = db_session.query(PasswordResetToken).one()
        record.expires_at = record.expires_at - timedelta(hours=2)
        db_session.commit()

        with pytest.raises(InvalidResetTokenError, match="Invalid or expired reset token"):
            password_reset_service.reset_password(token, "brandnew1")

    @pytest.mark.parametrize("token", ["", "not-a-real-token"])
    def test_unknown_token(self, db_session, token):
        with pytest.raises(InvalidResetTokenError):
            password_reset_service.reset_password(token, "brandnew1")

    def test_short_password_leaves_token_usable(self, db_session, user):
        token = self._issue(user)
        with pytest.raises(PasswordValidationError):
            password_reset_service.reset_password(token, "abc")
        password_reset_service.reset_password(token, "brandnew1")

    def test_reset_revokes_sessions(self, db_session, user):
        _, session_token = session_service.create_session(user.id)
        token = self._issue(user)
        password_reset_service.reset_password(token, "brandnew1")
        assert session_service.validate_session(session_token) is None
