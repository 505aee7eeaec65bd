# Overview: Service-layer operations for forgot-password / reset-password.

"""
Password reset tokens.

FLOW:
1. request_password_reset(email)
   - Unknown email: nothing is issued; the caller answers with the same
     generic message either way so accounts cannot be enumerated.
   - Known email: a token is persisted first (hash only, expires in
     PASSWORD_RESET_TTL_MINUTES), then the reset email is attempted.
     A failed send never rolls back the token.
   - With PASSWORD_RESET_INSECURE_LINK_FALLBACK on, a failed send hands the
     raw link back to the caller (development only).
2. reset_password(token, new_password)
   - Unknown, used or expired tokens are all "Invalid or expired reset token".
   - On success the password changes, the token is flagged used (kept for
     audit), and the user's open sessions are revoked.

Consumption is last-write-wins: two simultaneous redemptions of one token
are not serialized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from flask import current_app

from ..extensions import db
from ..models import PasswordResetToken
from ..time_utils import utcnow, utc_in
from . import auth_service, email_service, session_service


GENERIC_RESET_MESSAGE = "If an account with that email exists, we've sent a password reset link."
INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"

ResetEmailSender = Callable[[str, str], bool]


class InvalidResetTokenError(ValueError):
    """Token unknown, already used, or past its expiry."""
    pass


@dataclass
class PasswordResetRequest:
    token_issued: bool
    email_sent: bool
    # Only populated when delivery failed and the insecure fallback is enabled
    reset_link: Optional[str] = None
    token: Optional[str] = None


def build_reset_link(token: str) -> str:
    base = current_app.config.get("PUBLIC_BASE_URL", "http://localhost:5000").rstrip("/")
    return f"{base}/reset-password?token={token}"


def issue_token(email: str) -> tuple[PasswordResetToken, str]:
    """Persist a fresh token for email. Returns (record, plaintext_token)."""
    plaintext = session_service.generate_token()
    ttl_minutes = current_app.config.get("PASSWORD_RESET_TTL_MINUTES", 60)

    record = PasswordResetToken(
        email=email,
        token_hash=session_service.hash_token(plaintext),
        expires_at=utc_in(minutes=ttl_minutes),
        used=False,
    )
    db.session.add(record)
    db.session.commit()
    return record, plaintext


def request_password_reset(
    email: str,
    sender: ResetEmailSender | None = None,
) -> PasswordResetRequest:
    user = auth_service.get_user_by_email(email or "")
    if user is None:
        return PasswordResetRequest(token_issued=False, email_sent=False)

    _, token = issue_token(user.email)
    link = build_reset_link(token)

    send = sender or email_service.send_password_reset_email
    try:
        sent = bool(send(user.email, link))
    except Exception:
        current_app.logger.exception("Password reset email raised for %s", user.email)
        sent = False

    result = PasswordResetRequest(token_issued=True, email_sent=sent)
    if not sent:
        if current_app.config.get("PASSWORD_RESET_INSECURE_LINK_FALLBACK", False):
            current_app.logger.warning(
                "Reset email to %s failed; returning link to caller (insecure fallback enabled)",
                user.email,
            )
            result.reset_link = link
            result.token = token
        else:
            current_app.logger.warning("Reset email to %s failed; token issued anyway", user.email)
    return result


def get_valid_token(token: str) -> PasswordResetToken:
    if not token or not isinstance(token, str):
        raise InvalidResetTokenError(INVALID_TOKEN_MESSAGE)

    record = db.session.query(PasswordResetToken).filter_by(
        token_hash=session_service.hash_token(token)
    ).first()

    if record is None or record.used or record.expires_at < utcnow():
        raise InvalidResetTokenError(INVALID_TOKEN_MESSAGE)
    return record


def mark_token_used(record: PasswordResetToken) -> None:
    record.used = True
    record.used_at = utcnow()
    db.session.commit()


def reset_password(token: str, new_password: str):
    """
    Redeem a token and set a new password.

    Raises:
        InvalidResetTokenError: unknown, used or expired token
        PasswordValidationError: new password too short (token stays unused)
        NotFoundError: the account behind the token no longer exists
    """
    record = get_valid_token(token)
    auth_service.validate_password_strength(new_password)

    user = auth_service.update_user_password(record.email, new_password)
    mark_token_used(record)
    session_service.revoke_user_sessions(user.id, reason="Password reset")
    return user
