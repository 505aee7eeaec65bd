# Overview: Outbound email through the SendGrid v3 HTTP API.

"""
Email delivery.

The only message the marketplace sends is the password reset link. Delivery
problems are reported as False and logged; they never raise, because a
failed email must not undo the work that preceded it.

Modes:
- EMAIL_TEST_MODE: log the message and report success without sending
- no SENDGRID_API_KEY: log a warning and report failure
"""

from __future__ import annotations

from html import escape

import httpx
from flask import current_app


SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"
REQUEST_TIMEOUT_SECONDS = 10.0


def generate_password_reset_html(reset_link: str) -> str:
    link = escape(reset_link, quote=True)
    return f"""<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <h2>Reset your B2B Market password</h2>
    <p>We received a request to reset the password for your account.</p>
    <p><a href="{link}" style="display: inline-block; padding: 12px 24px; background: #1d4ed8; color: #fff; text-decoration: none; border-radius: 6px;">Reset password</a></p>
    <p>This link expires in 1 hour and can be used once.</p>
    <p>If you did not ask for a reset you can ignore this email.</p>
</body>
</html>"""


def generate_password_reset_plain(reset_link: str) -> str:
    return (
        "Reset your B2B Market password\n\n"
        "We received a request to reset the password for your account.\n"
        f"Open this link to choose a new one: {reset_link}\n\n"
        "This link expires in 1 hour and can be used once.\n"
        "If you did not ask for a reset you can ignore this email.\n"
    )


class EmailService:
    """SendGrid-backed sender. Build one per use with from_app_config()."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "B2B Market",
        test_mode: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.test_mode = test_mode
        self.transport = transport

    @classmethod
    def from_app_config(cls, transport: httpx.BaseTransport | None = None) -> "EmailService":
        config = current_app.config
        return cls(
            api_key=config.get("SENDGRID_API_KEY", ""),
            from_email=config.get("EMAIL_FROM_ADDRESS", "noreply@b2bmarket.com"),
            from_name=config.get("EMAIL_FROM_NAME", "B2B Market"),
            test_mode=config.get("EMAIL_TEST_MODE", False),
            transport=transport,
        )

    def send_email(self, to_email: str, subject: str, html_content: str, plain_content: str) -> bool:
        """
        Send one message.

        Returns:
            True if the provider accepted the message, False otherwise
        """
        logger = current_app.logger

        if self.test_mode:
            logger.info("[TEST MODE] Email to %s: %s\n%s", to_email, subject, plain_content)
            return True

        if not self.api_key:
            logger.warning("SENDGRID_API_KEY not configured - email not sent to %s", to_email)
            return False

        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": plain_content},
                {"type": "text/html", "value": html_content},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            with httpx.Client(transport=self.transport, timeout=REQUEST_TIMEOUT_SECONDS) as client:
                response = client.post(SENDGRID_SEND_URL, json=payload, headers=headers)
        except httpx.TimeoutException:
            logger.error("Timeout sending email to %s", to_email)
            return False
        except httpx.HTTPError as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return False

        if response.status_code in (200, 202):
            logger.info("Email sent successfully to %s", to_email)
            return True

        logger.error(
            "SendGrid API error for %s: %s - %s", to_email, response.status_code, response.text[:500]
        )
        return False

    def send_password_reset_email(self, email: str, reset_link: str) -> bool:
        return self.send_email(
            to_email=email,
            subject="Reset your B2B Market password",
            html_content=generate_password_reset_html(reset_link),
            plain_content=generate_password_reset_plain(reset_link),
        )


def send_password_reset_email(email: str, reset_link: str) -> bool:
    return EmailService.from_app_config().send_password_reset_email(email, reset_link)
