# Overview: Flask API routes for franchise listings; parses input and returns JSON responses.

# backend/marketplace/routes/franchises.py
"""
Franchise catalogue routes.

- GET  /api/franchises            active franchises
- GET  /api/franchises/search     category/country/state/priceRange filters
- GET  /api/franchises/<id>       one franchise
- POST /api/franchises            list a franchise (public, no moderation)
- POST /api/franchises/<id>/inquire
"""

from flask import Blueprint, request, jsonify, current_app

from ..models import Franchise, Inquiry
from ..services import listing_service, inquiry_service, search_service
from ..services.listing_service import FRANCHISE_MUTABLE_FIELDS
from ..services.inquiry_service import INQUIRY_MUTABLE_FIELDS
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    SERVER_CONTROLLED_FIELDS,
    ValidationError,
    enforce_rules_franchise,
    validate_payload,
)


franchises_bp = Blueprint("franchises", __name__, url_prefix="/api/franchises")


FRANCHISE_POLICY = ModelValidationPolicy(
    writable_fields=FRANCHISE_MUTABLE_FIELDS,
    required_on_create={"name", "category", "country"},
    ignored_fields=SERVER_CONTROLLED_FIELDS,
)

# Listing-specific inquiries take the target from the URL
LISTING_INQUIRY_POLICY = ModelValidationPolicy(
    writable_fields=INQUIRY_MUTABLE_FIELDS - {"franchise_id", "business_id"},
    required_on_create={"name", "email", "message"},
    ignored_fields=SERVER_CONTROLLED_FIELDS | {"franchise_id", "business_id"},
)


@franchises_bp.get("")
def list_franchises_route():
    franchises = listing_service.list_franchises(active_only=True)
    return jsonify({"franchises": [f.to_dict() for f in franchises]})


@franchises_bp.get("/search")
def search_franchises_route():
    """
    Query params (all optional, placeholders ignored):
    - category, country, state
    - priceRange: e.g. "$100K-$250K"; malformed ranges apply no price filter
    """
    filters = search_service.parse_franchise_filters(request.args)
    results = listing_service.search_franchises(filters)
    return jsonify({"franchises": [f.to_dict() for f in results], "count": len(results)})


@franchises_bp.get("/<int:franchise_id>")
def get_franchise_route(franchise_id: int):
    try:
        franchise = listing_service.get_franchise(franchise_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    if not franchise.is_active:
        return jsonify({"error": f"Franchise {franchise_id} not found"}), 404
    return jsonify({"franchise": franchise.to_dict()})


@franchises_bp.post("")
def create_franchise_route():
    """
    List a franchise. Published immediately.

    Required: name, category, country
    """
    try:
        patch = validate_payload(
            model=Franchise,
            payload=request.get_json(silent=True),
            policy=FRANCHISE_POLICY,
            partial=False,
        )
        enforce_rules_franchise(patch)
        franchise = listing_service.create_franchise(patch)
        current_app.logger.info("Franchise %s listed: %s", franchise.id, franchise.name)
        return jsonify({"franchise": franchise.to_dict()}), 201

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create franchise")
        return jsonify({"error": "Internal server error"}), 500


@franchises_bp.post("/<int:franchise_id>/inquire")
def inquire_franchise_route(franchise_id: int):
    try:
        franchise = listing_service.get_franchise(franchise_id)
        if not franchise.is_active:
            raise NotFoundError(f"Franchise {franchise_id} not found")

        patch = validate_payload(
            model=Inquiry,
            payload=request.get_json(silent=True),
            policy=LISTING_INQUIRY_POLICY,
            partial=False,
        )
        inquiry = inquiry_service.create_franchise_inquiry(franchise_id, patch)
        return jsonify({
            "inquiry": inquiry.to_dict(),
            "message": "Inquiry submitted successfully",
        }), 201

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to submit franchise inquiry")
        return jsonify({"error": "Internal server error"}), 500
