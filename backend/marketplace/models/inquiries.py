from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


INQUIRY_STATUSES = ("pending", "replied", "closed")


class Inquiry(db.Model):
    """
    Prospective buyer message.

    References a franchise, a business, or neither (a general contact
    message). The type is derived from those references on every read and
    is not stored.
    """
    __tablename__ = "inquiries"
    __table_args__ = (
        db.Index("ix_inquiries_status", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(64), nullable=True)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)

    franchise_id = db.Column(db.Integer, db.ForeignKey("franchises.id"), nullable=True, index=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id"), nullable=True, index=True)

    status = db.Column(db.String(16), nullable=False, default="pending")

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    franchise = db.relationship("Franchise", backref=db.backref("inquiries", lazy=True))
    business = db.relationship("Business", backref=db.backref("inquiries", lazy=True))

    @property
    def inquiry_type(self) -> str:
        if self.franchise_id is not None:
            return "Franchise"
        if self.business_id is not None:
            return "Business"
        return "General"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "subject": self.subject,
            "message": self.message,
            "franchise_id": self.franchise_id,
            "business_id": self.business_id,
            "inquiry_type": self.inquiry_type,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
        }
