# Overview: Service-layer operations for inquiries; creation, routing and status.

"""
Inquiry routing.

An inquiry is attached to a franchise, a business, or nothing (a general
contact message); Inquiry.inquiry_type derives which on read. New inquiries
are always pending. Status moves between pending, replied and closed at an
admin's discretion.
"""

from __future__ import annotations

from ..extensions import db
from ..models import Inquiry, INQUIRY_STATUSES
from ..validation import MAX_INTEGER, ValidationError, NotFoundError, enforce_rules_inquiry
from . import listing_service


INQUIRY_MUTABLE_FIELDS = {"name", "email", "phone", "subject", "message", "franchise_id", "business_id"}

FRANCHISE_SUBJECT = "Franchise Inquiry"
BUSINESS_SUBJECT = "Business Inquiry"


def create_inquiry(patch: dict) -> Inquiry:
    """
    Store an inquiry.

    Raises:
        ValidationError: both franchise_id and business_id set, or bad email
        NotFoundError: the referenced franchise/business does not exist
    """
    enforce_rules_inquiry(patch)

    if patch.get("franchise_id") is not None:
        listing_service.get_franchise(patch["franchise_id"])
    if patch.get("business_id") is not None:
        listing_service.get_business(patch["business_id"])

    inquiry = Inquiry(status="pending")
    for k, v in patch.items():
        if k in INQUIRY_MUTABLE_FIELDS:
            setattr(inquiry, k, v)

    db.session.add(inquiry)
    db.session.commit()
    return inquiry


def create_franchise_inquiry(franchise_id: int, patch: dict) -> Inquiry:
    data = {**patch, "franchise_id": franchise_id, "business_id": None}
    data["subject"] = data.get("subject") or FRANCHISE_SUBJECT
    return create_inquiry(data)


def create_business_inquiry(business_id: int, patch: dict) -> Inquiry:
    data = {**patch, "business_id": business_id, "franchise_id": None}
    data["subject"] = data.get("subject") or BUSINESS_SUBJECT
    return create_inquiry(data)


def create_contact_inquiry(patch: dict) -> Inquiry:
    data = {**patch, "franchise_id": None, "business_id": None}
    return create_inquiry(data)


def get_inquiry(inquiry_id: int) -> Inquiry:
    inquiry = db.session.get(Inquiry, inquiry_id) if abs(inquiry_id) <= MAX_INTEGER else None
    if inquiry is None:
        raise NotFoundError(f"Inquiry {inquiry_id} not found")
    return inquiry


def list_inquiries(status: str | None = None) -> list[Inquiry]:
    q = db.session.query(Inquiry)
    if status is not None:
        validate_inquiry_status(status)
        q = q.filter(Inquiry.status == status)
    return q.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).all()


def validate_inquiry_status(status: str) -> None:
    if status not in INQUIRY_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(INQUIRY_STATUSES)}"
        )


def update_inquiry_status(inquiry_id: int, status: str) -> Inquiry:
    validate_inquiry_status(status)
    inquiry = get_inquiry(inquiry_id)
    inquiry.status = status
    db.session.commit()
    return inquiry
