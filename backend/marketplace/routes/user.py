# Overview: Flask API routes for the signed-in user's own listings.

from flask import Blueprint, jsonify, g

from ..services import listing_service
from ..decorators import require_auth


user_bp = Blueprint("user", __name__, url_prefix="/api/user")


@user_bp.get("/businesses")
@require_auth
def my_businesses_route():
    """Every business the caller submitted, whatever its status."""
    businesses = listing_service.list_user_businesses(g.current_user.id)
    return jsonify({"businesses": [b.to_dict() for b in businesses]})


@user_bp.get("/advertisements")
@require_auth
def my_advertisements_route():
    ads = listing_service.list_user_advertisements(g.current_user.id)
    return jsonify({"advertisements": [a.to_dict() for a in ads]})
