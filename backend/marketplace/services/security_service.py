# Overview: Append-only security audit trail.

from ..extensions import db
from ..models import SecurityEvent
from ..time_utils import utcnow


def log_security_event(
    user_id: int | None,
    event_type: str,
    success: bool,
    resource: str | None = None,
    action: str | None = None,
    reason: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> SecurityEvent:
    """
    Record a security-relevant event.

    event_type examples:
    - ADMIN_ACCESS_DENIED
    - LOGIN_FAILED
    - PASSWORD_RESET_REQUESTED
    - PASSWORD_RESET_COMPLETED
    """
    event = SecurityEvent(
        user_id=user_id,
        event_type=event_type,
        resource=resource,
        action=action,
        success=success,
        reason=reason,
        ip_address=ip_address,
        user_agent=(user_agent or "")[:512] or None,
        occurred_at=utcnow(),
    )

    db.session.add(event)
    db.session.commit()

    return event


def list_security_events(event_type: str | None = None, limit: int = 200) -> list[SecurityEvent]:
    q = db.session.query(SecurityEvent)
    if event_type:
        q = q.filter_by(event_type=event_type)
    return q.order_by(SecurityEvent.occurred_at.desc(), SecurityEvent.id.desc()).limit(limit).all()
