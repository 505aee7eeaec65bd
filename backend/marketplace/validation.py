from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta


# Asking prices and investment bounds are whole dollars
MAX_LISTING_AMOUNT = 2_000_000_000

# Integer columns are 32-bit on every supported backend
MAX_INTEGER = 2_147_483_647

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate email)."""


class NotFoundError(LookupError):
    """404-level: the referenced row does not exist."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    - ignored_fields: server-controlled fields dropped silently if a client sends them
    """
    writable_fields: set[str]
    required_on_create: set[str] = field(default_factory=set)
    ignored_fields: set[str] = field(default_factory=set)


# Columns a client may never set on create, whatever the entity
SERVER_CONTROLLED_FIELDS = {"id", "status", "payment_status", "is_active", "user_id", "created_at"}


def to_snake(key: str) -> str:
    """contactEmail -> contact_email; snake_case keys pass through."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_keys(payload: dict) -> dict:
    return {to_snake(k): v for k, v in payload.items()}


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        return _check_integer_range(col, _coerce_integer(col, value))

    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        raise ValidationError(f"{col.key} must be true or false")

    # Strings / Text; numbers are accepted for free-text fields like revenue or budget
    if isinstance(coltype, (String, Text)):
        if isinstance(value, (dict, list, bool)):
            raise ValidationError(f"{col.key} must be a string")
        return str(value).strip()

    return value


def _check_integer_range(col, value: int) -> int:
    if not -MAX_INTEGER <= value <= MAX_INTEGER:
        raise ValidationError(f"{col.key} is out of range")
    return value


def _coerce_integer(col, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip().replace(",", "")
        if not stripped:
            raise ValidationError(f"{col.key} must be an integer")
        if "e" in stripped.lower() or "." in stripped:
            raise ValidationError(f"{col.key} must be a whole number")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{col.key} must be an integer")
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{col.key} must be a whole number")
    raise ValidationError(f"{col.key} must be an integer")


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    Keys may arrive camelCase (contactEmail) or snake_case (contact_email).
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    payload = {
        k: v for k, v in normalize_keys(payload).items()
        if k not in policy.ignored_fields
    }

    if not partial:
        missing = sorted(
            f for f in policy.required_on_create
            if payload.get(f) is None or (isinstance(payload.get(f), str) and not payload[f].strip())
        )
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)

    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        val = _coerce_value(col, raw)

        if isinstance(col.type, (String, Text)) and isinstance(val, str) and val == "":
            if not col.nullable:
                raise ValidationError(f"{k} cannot be blank")
            val = None

        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        patch[k] = val

    return patch


def validate_email(value: str | None, field_name: str = "email") -> str:
    if not value or not isinstance(value, str):
        raise ValidationError(f"{field_name} is required")
    email = value.strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} must be a valid email address")
    return email


def _check_amount(patch: dict, key: str) -> None:
    amount = patch.get(key)
    if amount is None:
        return
    if amount < 0:
        raise ValidationError(f"{key} must be >= 0")
    if amount > MAX_LISTING_AMOUNT:
        raise ValidationError(f"{key} cannot exceed {MAX_LISTING_AMOUNT:,}")


def _check_optional_email(patch: dict, key: str) -> None:
    if patch.get(key) is not None:
        patch[key] = validate_email(patch[key], key)


def enforce_rules_franchise(patch: dict) -> None:
    """Investment bounds are optional, but when both are given min <= max."""
    _check_amount(patch, "investment_min")
    _check_amount(patch, "investment_max")
    lo, hi = patch.get("investment_min"), patch.get("investment_max")
    if lo is not None and hi is not None and lo > hi:
        raise ValidationError("investment_min cannot exceed investment_max")
    _check_optional_email(patch, "contact_email")


def enforce_rules_business(patch: dict) -> None:
    _check_amount(patch, "price")
    _check_optional_email(patch, "contact_email")


def enforce_rules_advertisement(patch: dict) -> None:
    _check_optional_email(patch, "contact_email")


def enforce_rules_inquiry(patch: dict) -> None:
    if "email" in patch:
        patch["email"] = validate_email(patch["email"])
    if patch.get("franchise_id") is not None and patch.get("business_id") is not None:
        raise ValidationError("An inquiry can reference a franchise or a business, not both")
