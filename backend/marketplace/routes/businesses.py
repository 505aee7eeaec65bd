# Overview: Flask API routes for businesses for sale; parses input and returns JSON responses.

# backend/marketplace/routes/businesses.py
"""
Business-for-sale routes.

VISIBILITY:
- List and search only return active businesses.
- Detail returns a pending/inactive business only to an admin or its owner;
  everyone else gets 404.

SECURITY:
- New listings always start pending / unpaid / hidden. status,
  payment_status, is_active and user_id in the body are dropped; the owner
  is taken from the session (g.current_user), NOT from the request body.
- Status changes are admin-only.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..models import Business, Inquiry
from ..services import listing_service, inquiry_service, lifecycle_service, search_service
from ..services.package_service import quote_package
from ..services.listing_service import BUSINESS_MUTABLE_FIELDS
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    SERVER_CONTROLLED_FIELDS,
    ValidationError,
    enforce_rules_business,
    validate_payload,
)
from ..decorators import require_auth, require_admin, optional_auth
from .franchises import LISTING_INQUIRY_POLICY


businesses_bp = Blueprint("businesses", __name__, url_prefix="/api/businesses")


BUSINESS_POLICY = ModelValidationPolicy(
    writable_fields=BUSINESS_MUTABLE_FIELDS,
    required_on_create={"name", "category", "country"},
    ignored_fields=SERVER_CONTROLLED_FIELDS,
)


def status_args(data) -> tuple:
    """(status, is_active) from a status PATCH body; isActive/is_active optional."""
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload")
    status = data.get("status")
    if not status or not isinstance(status, str):
        raise ValidationError("status is required")
    is_active = data.get("isActive", data.get("is_active"))
    return status, is_active


@businesses_bp.get("")
def list_businesses_route():
    businesses = listing_service.list_businesses(active_only=True)
    return jsonify({"businesses": [b.to_dict() for b in businesses]})


@businesses_bp.get("/search")
def search_businesses_route():
    """
    Query params (all optional, placeholders ignored):
    - category, country, state
    - maxPrice: whole dollars; businesses without a price are always kept

    Error responses:
        400: maxPrice is not a non-negative whole number
    """
    try:
        filters = search_service.parse_business_filters(request.args)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    results = listing_service.search_businesses(filters)
    return jsonify({"businesses": [b.to_dict() for b in results], "count": len(results)})


@businesses_bp.get("/<int:business_id>")
@optional_auth
def get_business_route(business_id: int):
    try:
        business = listing_service.get_business(business_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    if not listing_service.is_visible_to(business, g.current_user):
        return jsonify({"error": f"Business {business_id} not found"}), 404
    return jsonify({"business": business.to_dict()})


@businesses_bp.post("")
@optional_auth
def create_business_route():
    """
    Submit a business for sale.

    Required: name, category, country
    Optional: price, package (test|basic|premium|enterprise), and details

    Response includes the package quote the checkout page should charge.
    """
    try:
        patch = validate_payload(
            model=Business,
            payload=request.get_json(silent=True),
            policy=BUSINESS_POLICY,
            partial=False,
        )
        enforce_rules_business(patch)

        user = g.current_user
        business = listing_service.create_business(patch, user_id=user.id if user else None)
        current_app.logger.info(
            "Business %s submitted by user=%s (pending)", business.id, business.user_id
        )

        return jsonify({
            "business": business.to_dict(),
            "quote": quote_package("business", business.package),
        }), 201

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create business")
        return jsonify({"error": "Internal server error"}), 500


@businesses_bp.post("/<int:business_id>/inquire")
@optional_auth
def inquire_business_route(business_id: int):
    try:
        business = listing_service.get_business(business_id)
        if not listing_service.is_visible_to(business, g.current_user):
            raise NotFoundError(f"Business {business_id} not found")

        patch = validate_payload(
            model=Inquiry,
            payload=request.get_json(silent=True),
            policy=LISTING_INQUIRY_POLICY,
            partial=False,
        )
        inquiry = inquiry_service.create_business_inquiry(business_id, patch)
        return jsonify({
            "inquiry": inquiry.to_dict(),
            "message": "Inquiry submitted successfully",
        }), 201

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to submit business inquiry")
        return jsonify({"error": "Internal server error"}), 500


@businesses_bp.patch("/<int:business_id>/status")
@require_auth
@require_admin
def update_business_status_route(business_id: int):
    """
    Moderate a business.

    Request body:
        {"status": "pending"|"active"|"inactive", "isActive": true|false (optional)}

    is_active is left untouched when isActive is omitted.
    """
    try:
        status, is_active = status_args(request.get_json(silent=True))
        business = lifecycle_service.update_business_status(business_id, status, is_active)
        return jsonify({"business": business.to_dict()}), 200

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update business status")
        return jsonify({"error": "Internal server error"}), 500
