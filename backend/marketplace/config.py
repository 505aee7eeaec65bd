# backend/marketplace/config.py
from __future__ import annotations
import os


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored next to the instance by default; Postgres via DATABASE_URL
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///marketplace.sqlite3",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    CORS_ALLOWED_ORIGINS = _env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5000",
            "http://127.0.0.1:5000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
    )

    # Bearer session lifetime (7 days)
    SESSION_TTL_HOURS = int(os.environ.get("SESSION_TTL_HOURS", "168"))

    # Password reset tokens are single-use and expire one hour after issuance
    PASSWORD_RESET_TTL_MINUTES = 60
    PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", "http://localhost:5000")

    # Outbound email (SendGrid v3 HTTP API)
    SENDGRID_API_KEY = os.environ.get("SENDGRID_API_KEY", "")
    EMAIL_FROM_ADDRESS = os.environ.get("EMAIL_FROM_ADDRESS", "noreply@b2bmarket.com")
    EMAIL_FROM_NAME = os.environ.get("EMAIL_FROM_NAME", "B2B Market")
    EMAIL_TEST_MODE = _env_bool("EMAIL_TEST_MODE")

    # DEV ONLY: hand the raw reset link back to the caller when email delivery fails
    PASSWORD_RESET_INSECURE_LINK_FALLBACK = _env_bool("PASSWORD_RESET_INSECURE_LINK_FALLBACK")
