from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


# Moderation and payment flags (stored independently on each listing)
LISTING_STATUSES = ("pending", "active", "inactive")
PAYMENT_STATUSES = ("unpaid", "paid", "refunded")


class ModeratedListingMixin:
    """
    Shared behaviour for listings that go through moderation (businesses and
    advertisements).

    status, payment_status and is_active are three separately settable
    columns. lifecycle_state folds them into one read-only tag so callers do
    not have to reconcile the flags themselves:

        refunded         payment_status == "refunded"
        active           is_active
        pending_payment  status == "pending", unpaid
        pending_review   status == "pending", paid
        inactive         everything else
    """

    @property
    def lifecycle_state(self) -> str:
        if self.payment_status == "refunded":
            return "refunded"
        if self.is_active:
            return "active"
        if self.status == "pending":
            return "pending_review" if self.payment_status == "paid" else "pending_payment"
        return "inactive"

    @property
    def flags_consistent(self) -> bool:
        """A visible listing should also carry status="active"."""
        return not self.is_active or self.status == "active"

    def _lifecycle_dict(self) -> dict:
        return {
            "status": self.status,
            "payment_status": self.payment_status,
            "is_active": self.is_active,
            "lifecycle_state": self.lifecycle_state,
        }


class Franchise(db.Model):
    """
    Franchise opportunity.

    Listed directly as active; there is no moderation step. After listing
    only is_active may change. investment_min/investment_max drive range
    search; investment_range is the legacy display string and is never parsed.
    """
    __tablename__ = "franchises"
    __table_args__ = (
        db.Index("ix_franchises_active_category", "is_active", "category"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(120), nullable=False)
    country = db.Column(db.String(120), nullable=False)
    state = db.Column(db.String(120), nullable=True)

    investment_range = db.Column(db.String(64), nullable=True)
    investment_min = db.Column(db.Integer, nullable=True)
    investment_max = db.Column(db.Integer, nullable=True)

    image_url = db.Column(db.String(1024), nullable=True)
    contact_email = db.Column(db.String(255), nullable=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "country": self.country,
            "state": self.state,
            "investment_range": self.investment_range,
            "investment_min": self.investment_min,
            "investment_max": self.investment_max,
            "image_url": self.image_url,
            "contact_email": self.contact_email,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
        }


class Business(ModeratedListingMixin, db.Model):
    """
    Business for sale.

    user_id is nullable: anonymous sellers may submit a listing and claim it
    later. Every new row starts pending / unpaid / hidden.
    """
    __tablename__ = "businesses"
    __table_args__ = (
        db.Index("ix_businesses_active_category", "is_active", "category"),
        db.Index("ix_businesses_user", "user_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(120), nullable=False)
    country = db.Column(db.String(120), nullable=False)
    state = db.Column(db.String(120), nullable=True)

    # Asking price in whole dollars; None means "price on request"
    price = db.Column(db.Integer, nullable=True)

    image_url = db.Column(db.String(1024), nullable=True)
    contact_email = db.Column(db.String(255), nullable=True)
    package = db.Column(db.String(32), nullable=True)

    year_established = db.Column(db.String(16), nullable=True)
    employees = db.Column(db.String(64), nullable=True)
    revenue = db.Column(db.String(64), nullable=True)
    reason = db.Column(db.Text, nullable=True)
    assets = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(16), nullable=False, default="pending")
    payment_status = db.Column(db.String(16), nullable=False, default="unpaid")
    is_active = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    owner = db.relationship("User", backref=db.backref("businesses", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "country": self.country,
            "state": self.state,
            "price": self.price,
            "image_url": self.image_url,
            "contact_email": self.contact_email,
            "package": self.package,
            "year_established": self.year_established,
            "employees": self.employees,
            "revenue": self.revenue,
            "reason": self.reason,
            "assets": self.assets,
            **self._lifecycle_dict(),
            "created_at": to_utc_z(self.created_at),
        }


class Advertisement(ModeratedListingMixin, db.Model):
    """Paid banner advertisement. Same pending / unpaid / hidden start as Business."""
    __tablename__ = "advertisements"
    __table_args__ = (
        db.Index("ix_advertisements_active", "is_active"),
        db.Index("ix_advertisements_user", "user_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(1024), nullable=False)
    target_url = db.Column(db.String(1024), nullable=True)
    package = db.Column(db.String(32), nullable=True)

    company = db.Column(db.String(200), nullable=True)
    contact_email = db.Column(db.String(255), nullable=True)
    contact_phone = db.Column(db.String(64), nullable=True)
    budget = db.Column(db.String(64), nullable=True)

    status = db.Column(db.String(16), nullable=False, default="pending")
    payment_status = db.Column(db.String(16), nullable=False, default="unpaid")
    is_active = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    owner = db.relationship("User", backref=db.backref("advertisements", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "target_url": self.target_url,
            "package": self.package,
            "company": self.company,
            "contact_email": self.contact_email,
            "contact_phone": self.contact_phone,
            "budget": self.budget,
            **self._lifecycle_dict(),
            "created_at": to_utc_z(self.created_at),
        }
