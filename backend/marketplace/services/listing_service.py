# Overview: Service-layer operations for listings; encapsulates business logic and database work.

"""
Listing repository for franchises, businesses and advertisements.

This module is the only writer of listing rows. The HTTP layer decides who
may call what; nothing here checks roles.

VISIBILITY:
- list_*(active_only=True) is the public catalogue and never returns
  pending or inactive rows.
- list_*_for_admin() returns everything and must sit behind the admin
  check at the boundary.

CREATION:
- Businesses and advertisements always start status="pending",
  payment_status="unpaid", is_active=False, whatever the caller sent.
  Activation is a separate admin step (lifecycle_service).
- Franchises are created active with no moderation step. This asymmetry is
  long-standing behaviour and kept deliberately.

SEARCH:
- Fetch the active rows, then evaluate search_service.matches() in memory.
  A full scan per search is fine for a catalogue of this size; if it ever
  moves into SQL the match rules in search_service must stay identical.
"""

from __future__ import annotations

from ..extensions import db
from ..models import Franchise, Business, Advertisement
from ..validation import MAX_INTEGER, NotFoundError
from .package_service import validate_package
from .search_service import FranchiseFilters, BusinessFilters, matches


FRANCHISE_MUTABLE_FIELDS = {
    "name", "description", "category", "country", "state",
    "investment_range", "investment_min", "investment_max",
    "image_url", "contact_email",
}

BUSINESS_MUTABLE_FIELDS = {
    "name", "description", "category", "country", "state", "price",
    "image_url", "contact_email", "package",
    "year_established", "employees", "revenue", "reason", "assets",
}

ADVERTISEMENT_MUTABLE_FIELDS = {
    "title", "description", "image_url", "target_url", "package",
    "company", "contact_email", "contact_phone", "budget",
}

PENDING_DEFAULTS = {
    "status": "pending",
    "payment_status": "unpaid",
    "is_active": False,
}


def _apply_patch(row, patch: dict, allowed: set[str]) -> None:
    for k, v in patch.items():
        if k not in allowed:
            continue
        setattr(row, k, v)


def _list(model, active_only: bool) -> list:
    q = db.session.query(model)
    if active_only:
        q = q.filter(model.is_active.is_(True))
    return q.order_by(model.id.asc()).all()


def _get(model, row_id: int, label: str):
    row = db.session.get(model, row_id) if abs(row_id) <= MAX_INTEGER else None
    if row is None:
        raise NotFoundError(f"{label} {row_id} not found")
    return row


# ---------------------------------------------------------------------------
# Franchises
# ---------------------------------------------------------------------------

def list_franchises(active_only: bool = True) -> list[Franchise]:
    return _list(Franchise, active_only)


def get_franchise(franchise_id: int) -> Franchise:
    return _get(Franchise, franchise_id, "Franchise")


def create_franchise(patch: dict) -> Franchise:
    franchise = Franchise(is_active=True)
    _apply_patch(franchise, patch, FRANCHISE_MUTABLE_FIELDS)

    db.session.add(franchise)
    db.session.commit()
    return franchise


def set_franchise_active(franchise_id: int, is_active: bool) -> Franchise:
    franchise = get_franchise(franchise_id)
    franchise.is_active = bool(is_active)
    db.session.commit()
    return franchise


def search_franchises(filters: FranchiseFilters) -> list[Franchise]:
    return [f for f in list_franchises(active_only=True) if matches(f, filters)]


# ---------------------------------------------------------------------------
# Businesses
# ---------------------------------------------------------------------------

def list_businesses(active_only: bool = True) -> list[Business]:
    return _list(Business, active_only)


def list_businesses_for_admin() -> list[Business]:
    return _list(Business, active_only=False)


def get_business(business_id: int) -> Business:
    return _get(Business, business_id, "Business")


def create_business(patch: dict, user_id: int | None = None) -> Business:
    """
    Submit a business for sale. The row is hidden until an admin activates
    it; any status fields in patch are ignored.
    """
    business = Business(user_id=user_id, **PENDING_DEFAULTS)
    _apply_patch(business, patch, BUSINESS_MUTABLE_FIELDS)
    business.package = validate_package(business.package)

    db.session.add(business)
    db.session.commit()
    return business


def search_businesses(filters: BusinessFilters) -> list[Business]:
    return [b for b in list_businesses(active_only=True) if matches(b, filters)]


def list_user_businesses(user_id: int) -> list[Business]:
    return (
        db.session.query(Business)
        .filter(Business.user_id == user_id)
        .order_by(Business.id.asc())
        .all()
    )


# ---------------------------------------------------------------------------
# Advertisements
# ---------------------------------------------------------------------------

def list_advertisements(active_only: bool = True) -> list[Advertisement]:
    return _list(Advertisement, active_only)


def list_advertisements_for_admin() -> list[Advertisement]:
    return _list(Advertisement, active_only=False)


def get_advertisement(advertisement_id: int) -> Advertisement:
    return _get(Advertisement, advertisement_id, "Advertisement")


def create_advertisement(patch: dict, user_id: int | None = None) -> Advertisement:
    ad = Advertisement(user_id=user_id, **PENDING_DEFAULTS)
    _apply_patch(ad, patch, ADVERTISEMENT_MUTABLE_FIELDS)
    ad.package = validate_package(ad.package)

    db.session.add(ad)
    db.session.commit()
    return ad


def list_user_advertisements(user_id: int) -> list[Advertisement]:
    return (
        db.session.query(Advertisement)
        .filter(Advertisement.user_id == user_id)
        .order_by(Advertisement.id.asc())
        .all()
    )


def is_visible_to(listing, user) -> bool:
    """Public detail pages show active listings; admins and owners see their pending ones too."""
    if listing.is_active:
        return True
    if user is None:
        return False
    return user.is_admin or (listing.user_id is not None and listing.user_id == user.id)
