# Overview: Flask API routes for admin operations; parses input and returns JSON responses.

# backend/marketplace/routes/admin.py
"""
Admin routes for moderation and payment confirmation.

Provides endpoints for:
- Listing every business/advertisement regardless of status
- Reading the inquiry inbox
- Recording admin-confirmed payment outcomes
- Toggling franchise visibility

All endpoints require authentication and the admin role.
"""

from flask import Blueprint, request, jsonify, current_app

from ..services import listing_service, lifecycle_service, inquiry_service, security_service
from ..validation import NotFoundError, ValidationError
from ..decorators import require_auth, require_admin


admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _json_field(*names):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload")
    for name in names:
        if name in data:
            return data[name]
    raise ValidationError(f"{names[-1]} is required")


# =============================================================================
# LISTINGS
# =============================================================================

@admin_bp.get("/businesses")
@require_auth
@require_admin
def list_businesses():
    """
    All businesses, any status.

    Query params:
    - status: pending | active | inactive
    """
    status = request.args.get("status")
    businesses = listing_service.list_businesses_for_admin()
    if status:
        businesses = [b for b in businesses if b.status == status]
    return jsonify({"businesses": [b.to_dict() for b in businesses], "count": len(businesses)})


@admin_bp.get("/advertisements")
@require_auth
@require_admin
def list_advertisements():
    status = request.args.get("status")
    ads = listing_service.list_advertisements_for_admin()
    if status:
        ads = [a for a in ads if a.status == status]
    return jsonify({"advertisements": [a.to_dict() for a in ads], "count": len(ads)})


@admin_bp.patch("/businesses/<int:business_id>/payment-status")
@require_auth
@require_admin
def update_business_payment_status(business_id: int):
    """
    Record a payment outcome confirmed with the processor.

    Request body: {"paymentStatus": "unpaid" | "paid" | "refunded"}

    Does not change visibility; activate with PATCH /api/businesses/<id>/status.
    """
    try:
        payment_status = _json_field("payment_status", "paymentStatus")
        business = lifecycle_service.update_business_payment_status(business_id, payment_status)
        return jsonify({"business": business.to_dict()}), 200

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update business payment status")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.patch("/advertisements/<int:advertisement_id>/payment-status")
@require_auth
@require_admin
def update_advertisement_payment_status(advertisement_id: int):
    try:
        payment_status = _json_field("payment_status", "paymentStatus")
        ad = lifecycle_service.update_advertisement_payment_status(advertisement_id, payment_status)
        return jsonify({"advertisement": ad.to_dict()}), 200

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update advertisement payment status")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.patch("/franchises/<int:franchise_id>/active")
@require_auth
@require_admin
def set_franchise_active(franchise_id: int):
    """Request body: {"isActive": true | false}"""
    try:
        is_active = _json_field("is_active", "isActive")
        if not isinstance(is_active, bool):
            raise ValidationError("isActive must be true or false")
        franchise = listing_service.set_franchise_active(franchise_id, is_active)
        current_app.logger.info("Franchise %s is_active -> %s", franchise.id, franchise.is_active)
        return jsonify({"franchise": franchise.to_dict()}), 200

    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update franchise")
        return jsonify({"error": "Internal server error"}), 500


# =============================================================================
# INQUIRIES & AUDIT
# =============================================================================

@admin_bp.get("/inquiries")
@require_auth
@require_admin
def list_inquiries():
    """
    Inquiry inbox, newest first.

    Query params:
    - status: pending | replied | closed
    """
    try:
        inquiries = inquiry_service.list_inquiries(status=request.args.get("status") or None)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"inquiries": [i.to_dict() for i in inquiries], "count": len(inquiries)})


@admin_bp.get("/pending")
@require_auth
@require_admin
def pending_queue():
    queue = lifecycle_service.get_pending_queue()
    return jsonify({
        "businesses": [b.to_dict() for b in queue["businesses"]],
        "advertisements": [a.to_dict() for a in queue["advertisements"]],
    })


@admin_bp.get("/security-events")
@require_auth
@require_admin
def list_security_events():
    limit = request.args.get("limit", 200, type=int)
    events = security_service.list_security_events(
        event_type=request.args.get("event_type") or None,
        limit=max(1, min(limit, 1000)),
    )
    return jsonify({"events": [e.to_dict() for e in events], "count": len(events)})
