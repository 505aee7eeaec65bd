# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/marketplace/routes/auth.py
"""
Authentication API routes

- Self-registration with email + password (role "user")
- Login returns an opaque bearer token; logout revokes it
- Forgot/reset password never reveals whether an email is registered
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..services import auth_service, session_service, security_service, password_reset_service
from ..services.auth_service import AuthenticationError, PasswordValidationError
from ..services.password_reset_service import GENERIC_RESET_MESSAGE, InvalidResetTokenError
from ..validation import ConflictError, NotFoundError, ValidationError
from ..decorators import require_auth
from ..time_utils import to_utc_z


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@auth_bp.post("/register")
def register_route():
    """
    Create an account and sign it in.

    Request body:
        email, password, firstName/first_name, lastName/last_name

    Error responses:
        400: missing/invalid email or password too short
        409: email already registered
    """
    data = _json_body()
    try:
        user = auth_service.register_user(
            email=data.get("email"),
            password=data.get("password"),
            first_name=data.get("firstName") or data.get("first_name"),
            last_name=data.get("lastName") or data.get("last_name"),
        )
        _, token = session_service.create_session(
            user_id=user.id,
            user_agent=request.headers.get("User-Agent"),
            ip_address=request.remote_addr,
        )
        current_app.logger.info("User registered: %s", user.email)
        return jsonify({"user": user.to_dict(), "token": token}), 201

    except ConflictError as e:
        return jsonify({"error": str(e)}), 409
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Registration failed")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/login")
def login_route():
    """
    Authenticate user and create session token.

    Token must be included in Authorization header for protected routes.
    """
    data = _json_body()
    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "email and password required"}), 400
    if not isinstance(email, str) or not isinstance(password, str):
        return jsonify({"error": "email and password must be strings"}), 400

    user_agent = request.headers.get("User-Agent")
    ip_address = request.remote_addr

    try:
        user = auth_service.authenticate(email, password)
    except AuthenticationError as e:
        security_service.log_security_event(
            user_id=None,
            event_type="LOGIN_FAILED",
            success=False,
            resource=request.path,
            action=request.method,
            reason=str(e),
            ip_address=ip_address,
            user_agent=user_agent,
        )
        current_app.logger.warning("Failed login for %s from %s", email, ip_address)
        return jsonify({"error": str(e)}), 401
    except Exception:
        current_app.logger.exception("Login failed")
        return jsonify({"error": "Internal server error"}), 500

    session, token = session_service.create_session(
        user_id=user.id,
        user_agent=user_agent,
        ip_address=ip_address,
    )

    return jsonify({
        "user": user.to_dict(),
        "token": token,
        "expires_at": to_utc_z(session.expires_at),
    }), 200


@auth_bp.post("/logout")
@require_auth
def logout_route():
    session_service.revoke_session(g.auth_token, reason="User logout")
    return jsonify({"message": "Logged out successfully"}), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    return jsonify({"user": g.current_user.to_dict()}), 200


@auth_bp.post("/forgot-password")
def forgot_password_route():
    """
    Start a password reset.

    Always answers 200 with the same message whether or not the email is
    registered. resetLink/token are only included when email delivery failed
    and PASSWORD_RESET_INSECURE_LINK_FALLBACK is enabled.
    """
    email = _json_body().get("email")
    if not email or not isinstance(email, str):
        return jsonify({"error": "Email is required"}), 400

    try:
        result = password_reset_service.request_password_reset(email)
    except Exception:
        current_app.logger.exception("Password reset request failed")
        return jsonify({"error": "Internal server error"}), 500

    if result.token_issued:
        security_service.log_security_event(
            user_id=None,
            event_type="PASSWORD_RESET_REQUESTED",
            success=True,
            resource=request.path,
            action=request.method,
            reason=None if result.email_sent else "Email delivery failed",
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
        )

    body = {"message": GENERIC_RESET_MESSAGE}
    if result.reset_link:
        body["resetLink"] = result.reset_link
        body["token"] = result.token
    return jsonify(body), 200


@auth_bp.post("/reset-password")
def reset_password_route():
    data = _json_body()
    token = data.get("token")
    new_password = data.get("password") or data.get("newPassword") or data.get("new_password")

    if not token or not new_password:
        return jsonify({"error": "Token and new password are required"}), 400

    try:
        user = password_reset_service.reset_password(token, new_password)
    except InvalidResetTokenError as e:
        return jsonify({"error": str(e)}), 400
    except PasswordValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError:
        return jsonify({"error": password_reset_service.INVALID_TOKEN_MESSAGE}), 400
    except Exception:
        current_app.logger.exception("Password reset failed")
        return jsonify({"error": "Internal server error"}), 500

    security_service.log_security_event(
        user_id=user.id,
        event_type="PASSWORD_RESET_COMPLETED",
        success=True,
        resource=request.path,
        action=request.method,
        ip_address=request.remote_addr,
        user_agent=request.headers.get("User-Agent"),
    )
    return jsonify({"message": "Password has been reset successfully"}), 200
