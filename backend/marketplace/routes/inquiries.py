# Overview: Flask API routes for inquiries and the contact form.

# backend/marketplace/routes/inquiries.py
"""
Inquiry routes.

- POST /api/inquiries        general inquiry; may carry franchiseId OR businessId
- POST /api/contact          contact form (always a general inquiry)
- GET  /api/inquiries/<id>   admin
- PATCH /api/inquiries/<id>/status  admin: pending | replied | closed

Submitting is public. Reading inquiries exposes buyers' contact details, so
it is admin-only.
"""

from flask import Blueprint, request, jsonify, current_app

from ..models import Inquiry
from ..services import inquiry_service
from ..services.inquiry_service import INQUIRY_MUTABLE_FIELDS
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    SERVER_CONTROLLED_FIELDS,
    ValidationError,
    validate_payload,
)
from ..decorators import require_auth, require_admin


inquiries_bp = Blueprint("inquiries", __name__, url_prefix="/api")


INQUIRY_POLICY = ModelValidationPolicy(
    writable_fields=INQUIRY_MUTABLE_FIELDS,
    required_on_create={"name", "email", "subject", "message"},
    ignored_fields=SERVER_CONTROLLED_FIELDS,
)

CONTACT_POLICY = ModelValidationPolicy(
    writable_fields=INQUIRY_MUTABLE_FIELDS - {"franchise_id", "business_id"},
    required_on_create={"name", "email", "subject", "message"},
    ignored_fields=SERVER_CONTROLLED_FIELDS | {"franchise_id", "business_id"},
)


def _submit(policy: ModelValidationPolicy, create):
    try:
        patch = validate_payload(
            model=Inquiry,
            payload=request.get_json(silent=True),
            policy=policy,
            partial=False,
        )
        inquiry = create(patch)
        current_app.logger.info("Inquiry %s received (%s)", inquiry.id, inquiry.inquiry_type)
        return jsonify({
            "inquiry": inquiry.to_dict(),
            "message": "Inquiry submitted successfully",
        }), 201

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to submit inquiry")
        return jsonify({"error": "Internal server error"}), 500


@inquiries_bp.post("/inquiries")
def create_inquiry_route():
    """
    Error responses:
        400: missing fields, bad email, or both franchiseId and businessId
        404: referenced franchise/business does not exist
    """
    return _submit(INQUIRY_POLICY, inquiry_service.create_inquiry)


@inquiries_bp.post("/contact")
def contact_route():
    return _submit(CONTACT_POLICY, inquiry_service.create_contact_inquiry)


@inquiries_bp.get("/inquiries/<int:inquiry_id>")
@require_auth
@require_admin
def get_inquiry_route(inquiry_id: int):
    try:
        inquiry = inquiry_service.get_inquiry(inquiry_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify({"inquiry": inquiry.to_dict()})


@inquiries_bp.patch("/inquiries/<int:inquiry_id>/status")
@require_auth
@require_admin
def update_inquiry_status_route(inquiry_id: int):
    data = request.get_json(silent=True)
    status = data.get("status") if isinstance(data, dict) else None
    if not status:
        return jsonify({"error": "status is required"}), 400

    try:
        inquiry = inquiry_service.update_inquiry_status(inquiry_id, status)
        return jsonify({"inquiry": inquiry.to_dict()}), 200

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update inquiry status")
        return jsonify({"error": "Internal server error"}), 500
