# Overview: Flask API routes for paid advertisements; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g, current_app

from ..models import Advertisement
from ..services import listing_service, lifecycle_service
from ..services.package_service import quote_package
from ..services.listing_service import ADVERTISEMENT_MUTABLE_FIELDS
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    SERVER_CONTROLLED_FIELDS,
    ValidationError,
    enforce_rules_advertisement,
    validate_payload,
)
from ..decorators import require_auth, require_admin, optional_auth
from .businesses import status_args


advertisements_bp = Blueprint("advertisements", __name__, url_prefix="/api/advertisements")


ADVERTISEMENT_POLICY = ModelValidationPolicy(
    writable_fields=ADVERTISEMENT_MUTABLE_FIELDS,
    required_on_create={"title", "image_url"},
    ignored_fields=SERVER_CONTROLLED_FIELDS,
)


@advertisements_bp.get("")
def list_advertisements_route():
    ads = listing_service.list_advertisements(active_only=True)
    return jsonify({"advertisements": [a.to_dict() for a in ads]})


@advertisements_bp.get("/<int:advertisement_id>")
@optional_auth
def get_advertisement_route(advertisement_id: int):
    try:
        ad = listing_service.get_advertisement(advertisement_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    if not listing_service.is_visible_to(ad, g.current_user):
        return jsonify({"error": f"Advertisement {advertisement_id} not found"}), 404
    return jsonify({"advertisement": ad.to_dict()})


@advertisements_bp.post("")
@optional_auth
def create_advertisement_route():
    """
    Submit an advertisement. Starts pending / unpaid / hidden.

    Required: title, imageUrl
    """
    try:
        patch = validate_payload(
            model=Advertisement,
            payload=request.get_json(silent=True),
            policy=ADVERTISEMENT_POLICY,
            partial=False,
        )
        enforce_rules_advertisement(patch)

        user = g.current_user
        ad = listing_service.create_advertisement(patch, user_id=user.id if user else None)
        current_app.logger.info("Advertisement %s submitted by user=%s (pending)", ad.id, ad.user_id)

        return jsonify({
            "advertisement": ad.to_dict(),
            "quote": quote_package("advertisement", ad.package),
        }), 201

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create advertisement")
        return jsonify({"error": "Internal server error"}), 500


@advertisements_bp.patch("/<int:advertisement_id>/status")
@require_auth
@require_admin
def update_advertisement_status_route(advertisement_id: int):
    try:
        status, is_active = status_args(request.get_json(silent=True))
        ad = lifecycle_service.update_advertisement_status(advertisement_id, status, is_active)
        return jsonify({"advertisement": ad.to_dict()}), 200

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update advertisement status")
        return jsonify({"error": "Internal server error"}), 500
