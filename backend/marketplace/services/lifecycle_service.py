# Overview: Service-layer operations for listing moderation and payment state.

"""
Listing Moderation & Payment Lifecycle

================================================================================
PURPOSE: Govern visibility and payment state of businesses and advertisements
================================================================================

STATE (per listing, three independently stored fields):
    status          pending | active | inactive
    payment_status  unpaid | paid | refunded
    is_active       True | False   (what the public catalogue filters on)

    New listings: pending / unpaid / False (see listing_service).

TRANSITIONS:
- Admin-only, through update_*_status() and update_*_payment_status().
- Any status may move to any other status; last write wins. There is no
  version column and no locking.
- is_active is only changed when the caller passes it. The flags are kept
  loosely coupled; lifecycle_state (models.listings) gives callers one
  derived tag and an inconsistent combination is logged, not rejected.

PAYMENT:
- Nothing here talks to the card processor. payment_status changes when an
  admin confirms the processor's result. Marking a listing paid does NOT
  activate it; activation stays a moderation decision.
================================================================================
"""

from __future__ import annotations
from typing import Literal

from flask import current_app

from ..extensions import db
from ..models import Business, Advertisement, LISTING_STATUSES, PAYMENT_STATUSES
from ..validation import ValidationError
from . import listing_service


VALID_LISTING_STATUSES = set(LISTING_STATUSES)
VALID_PAYMENT_STATUSES = set(PAYMENT_STATUSES)
ListingStatus = Literal["pending", "active", "inactive"]
PaymentStatus = Literal["unpaid", "paid", "refunded"]


class LifecycleError(ValidationError):
    """Raised when a status value outside the allowed set is requested."""


def validate_status(status: str) -> None:
    if status not in VALID_LISTING_STATUSES:
        raise LifecycleError(
            f"Invalid status '{status}'. Must be one of: {', '.join(LISTING_STATUSES)}"
        )


def validate_payment_status(payment_status: str) -> None:
    if payment_status not in VALID_PAYMENT_STATUSES:
        raise LifecycleError(
            f"Invalid payment status '{payment_status}'. Must be one of: {', '.join(PAYMENT_STATUSES)}"
        )


def _apply_status(listing, status: str, is_active: bool | None, label: str):
    validate_status(status)
    if is_active is not None and not isinstance(is_active, bool):
        raise ValidationError("is_active must be true or false")

    listing.status = status
    if is_active is not None:
        listing.is_active = is_active

    db.session.commit()

    current_app.logger.info(
        "%s %s status -> %s (is_active=%s)", label, listing.id, listing.status, listing.is_active
    )
    if not listing.flags_consistent:
        current_app.logger.warning(
            "%s %s is visible but status is '%s'", label, listing.id, listing.status
        )
    return listing


def update_business_status(
    business_id: int,
    status: ListingStatus,
    is_active: bool | None = None,
) -> Business:
    """
    Set a business's moderation status, and optionally its visibility.

    Raises:
        LifecycleError: invalid status value (nothing is written)
        NotFoundError: no such business
    """
    validate_status(status)
    business = listing_service.get_business(business_id)
    return _apply_status(business, status, is_active, "Business")


def update_advertisement_status(
    advertisement_id: int,
    status: ListingStatus,
    is_active: bool | None = None,
) -> Advertisement:
    validate_status(status)
    ad = listing_service.get_advertisement(advertisement_id)
    return _apply_status(ad, status, is_active, "Advertisement")


def _apply_payment_status(listing, payment_status: str, label: str):
    validate_payment_status(payment_status)
    previous = listing.payment_status
    listing.payment_status = payment_status
    db.session.commit()

    current_app.logger.info(
        "%s %s payment_status %s -> %s", label, listing.id, previous, payment_status
    )
    return listing


def update_business_payment_status(business_id: int, payment_status: PaymentStatus) -> Business:
    """Record an admin-confirmed payment outcome. Visibility is untouched."""
    validate_payment_status(payment_status)
    business = listing_service.get_business(business_id)
    return _apply_payment_status(business, payment_status, "Business")


def update_advertisement_payment_status(advertisement_id: int, payment_status: PaymentStatus) -> Advertisement:
    validate_payment_status(payment_status)
    ad = listing_service.get_advertisement(advertisement_id)
    return _apply_payment_status(ad, payment_status, "Advertisement")


def get_pending_queue() -> dict:
    """Listings waiting on moderation, for the admin dashboard."""
    businesses = (
        db.session.query(Business)
        .filter(Business.status == "pending")
        .order_by(Business.id.asc())
        .all()
    )
    ads = (
        db.session.query(Advertisement)
        .filter(Advertisement.status == "pending")
        .order_by(Advertisement.id.asc())
        .all()
    )
    return {"businesses": businesses, "advertisements": ads}


def lifecycle_state(listing) -> str:
    return listing.lifecycle_state


def is_consistent(listing) -> bool:
    return listing.flags_consistent
