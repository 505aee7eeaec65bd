# Overview: Request authentication and admin decorators for API routes.

from functools import wraps
from flask import request, jsonify, g, current_app

from .services import session_service, security_service


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def require_auth(f):
    """
    Require a valid bearer session.

    Sets the following Flask g attributes:
    - g.current_user: The authenticated User object
    - g.auth_token: The plaintext token (for logout)

    SECURITY: Returns 401 if:
    - No Authorization header
    - Invalid, revoked or expired token
    - User account deactivated
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if token is None:
            g.current_user = None
            return jsonify({"error": "Authentication required"}), 401

        user = session_service.validate_session(token)
        if user is None:
            g.current_user = None
            return jsonify({"error": "Invalid or expired token"}), 401

        g.current_user = user
        g.auth_token = token
        return f(*args, **kwargs)

    return decorated_function


def optional_auth(f):
    """
    Resolve the caller if a bearer token is sent, but never reject.

    g.current_user is the User or None. A bad token is treated as anonymous.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        g.current_user = session_service.validate_session(token) if token else None
        return f(*args, **kwargs)

    return decorated_function


def require_admin(f):
    """
    Require an authenticated admin. Use after @require_auth.

    Denials are logged and persisted as ADMIN_ACCESS_DENIED security events.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = getattr(g, "current_user", None)
        if user is None:
            return jsonify({"error": "Authentication required"}), 401

        if not user.is_admin:
            current_app.logger.warning(
                "Admin access denied: user=%s email=%s ip=%s %s %s",
                user.id, user.email, request.remote_addr, request.method, request.path,
            )
            security_service.log_security_event(
                user_id=user.id,
                event_type="ADMIN_ACCESS_DENIED",
                success=False,
                resource=request.path,
                action=request.method,
                reason="User is not an admin",
                ip_address=request.remote_addr,
                user_agent=request.headers.get("User-Agent"),
            )
            return jsonify({"error": "Admin access required"}), 403

        current_app.logger.info(
            "Admin access granted: user=%s %s %s", user.id, request.method, request.path
        )
        return f(*args, **kwargs)

    return decorated_function
