# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Account registration and credential checks.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Minimum 6 characters
- Duplicate emails are detected with a lookup before insert so the caller
  gets a precise conflict message rather than a constraint failure
- Session tokens are managed separately (see session_service.py)
"""

import bcrypt
from flask import current_app, has_app_context

from ..extensions import db
from ..models import User
from ..validation import ConflictError, NotFoundError, ValidationError, validate_email
from ..time_utils import utcnow


MIN_PASSWORD_LENGTH = 6
DEFAULT_BCRYPT_ROUNDS = 12
VALID_ROLES = {"user", "admin"}


class PasswordValidationError(ValidationError):
    """Raised when password doesn't meet strength requirements."""
    pass


class AuthenticationError(Exception):
    """Bad credentials or an inactive account."""
    pass


def validate_password_strength(password: str) -> None:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt (cost factor 12 unless BCRYPT_ROUNDS overrides it).

    Password is validated for strength before hashing.
    """
    validate_password_strength(password)
    rounds = DEFAULT_BCRYPT_ROUNDS
    if has_app_context():
        rounds = current_app.config.get("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """Timing-safe bcrypt comparison. Malformed hashes never verify."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def get_user_by_email(email: str) -> User | None:
    return db.session.query(User).filter_by(email=email.strip().lower()).first()


def register_user(
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: str = "user",
) -> User:
    """
    Create a new account.

    Raises:
        ValidationError: malformed email or unknown role
        PasswordValidationError: password too short
        ConflictError: email already registered
    """
    email = validate_email(email)
    if role not in VALID_ROLES:
        raise ValidationError(f"Invalid role '{role}'")
    for name in (first_name, last_name):
        if name is not None and not isinstance(name, str):
            raise ValidationError("Names must be strings")

    if get_user_by_email(email) is not None:
        raise ConflictError("User already exists with this email")

    password_hash = hash_password(password)

    user = User(
        email=email,
        password_hash=password_hash,
        first_name=(first_name or "").strip() or None,
        last_name=(last_name or "").strip() or None,
        role=role,
        is_active=True,
    )

    db.session.add(user)
    db.session.commit()
    return user


def authenticate(email: str, password: str) -> User:
    """
    Check credentials and stamp last_login_at.

    Unknown email and wrong password produce the same message.
    """
    user = get_user_by_email(email or "")
    if user is None or not verify_password(password or "", user.password_hash):
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        raise AuthenticationError("Account is inactive")

    user.last_login_at = utcnow()
    db.session.commit()
    return user


def update_user_password(email: str, new_password: str) -> User:
    user = get_user_by_email(email)
    if user is None:
        raise NotFoundError("User not found")

    user.password_hash = hash_password(new_password)
    db.session.commit()
    return user


def promote_to_admin(email: str) -> User:
    user = get_user_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    user.role = "admin"
    db.session.commit()
    return user


def set_user_active(user_id: int, is_active: bool) -> User:
    user = get_user(user_id)
    user.is_active = is_active
    db.session.commit()
    return user
