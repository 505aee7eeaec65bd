# backend/marketplace/routes/system.py
"""
System health and package catalogue endpoints.
"""

import time
from flask import Blueprint, current_app, jsonify, request

from ..extensions import db
from ..models import User, Franchise, Business, Advertisement, SessionToken
from ..services import package_service
from ..validation import ValidationError
from ..time_utils import utcnow

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity with a count per core table.
    """
    start_time = time.time()
    try:
        details = {
            "users": db.session.query(User).count(),
            "franchises": db.session.query(Franchise).count(),
            "businesses": db.session.query(Business).count(),
            "advertisements": db.session.query(Advertisement).count(),
        }
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


def check_session_service_health() -> dict:
    start_time = time.time()
    try:
        now = utcnow()
        active_sessions = db.session.query(SessionToken).filter(
            SessionToken.is_revoked.is_(False),
            SessionToken.expires_at >= now,
        ).count()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {"active_sessions": active_sessions},
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Session service health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Session service error"
        }


@system_bp.get("/health")
def health():
    """
    Health check.

    Returns:
    - 200: database and session store reachable
    - 503: one or more checks failed
    """
    start_time = time.time()

    database_health = check_database_health()
    session_health = check_session_service_health()

    all_checks = [database_health, session_health]
    healthy = all(check["status"] == "healthy" for check in all_checks)

    response = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": utcnow().isoformat() + "Z",
        "total_latency_ms": round((time.time() - start_time) * 1000, 2),
        "checks": {
            "database": database_health,
            "session_service": session_health,
        }
    }
    return response, 200 if healthy else 503


@system_bp.get("/api/packages")
def packages_route():
    """
    Package tiers and checkout prices.

    Query params:
    - kind + package: return a single quote instead of the full catalogue
    """
    kind = request.args.get("kind")
    if kind:
        try:
            return jsonify({"quote": package_service.quote_package(kind, request.args.get("package"))})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    return jsonify({
        "tiers": list(package_service.PACKAGE_TIERS),
        "prices": package_service.package_catalog(),
        "currency": "usd",
    })
