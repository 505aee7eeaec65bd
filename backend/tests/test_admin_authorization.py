"""
Authorization tests.

Verifies:
- Unauthenticated requests to admin endpoints return 401
- Non-admin users are denied (403) and the denial is recorded
- Admins can moderate listings and confirm payments
"""

import pytest

from marketplace.models import SecurityEvent


ADMIN_ENDPOINTS = [
    ("GET", "/api/admin/businesses"),
    ("GET", "/api/admin/advertisements"),
    ("GET", "/api/admin/inquiries"),
    ("GET", "/api/admin/pending"),
    ("GET", "/api/admin/security-events"),
    ("PATCH", "/api/admin/businesses/1/payment-status"),
    ("PATCH", "/api/admin/advertisements/1/payment-status"),
    ("PATCH", "/api/admin/franchises/1/active"),
    ("PATCH", "/api/businesses/1/status"),
    ("PATCH", "/api/advertisements/1/status"),
    ("GET", "/api/inquiries/1"),
    ("PATCH", "/api/inquiries/1/status"),
]


# =============================================================================
# UNAUTHENTICATED ACCESS (401)
# =============================================================================


class TestUnauthenticatedAccess:
    """All protected endpoints return 401 without a token."""

    @pytest.mark.parametrize(
        "method,path",
        ADMIN_ENDPOINTS + [
            ("GET", "/api/user/businesses"),
            ("GET", "/api/user/advertisements"),
            ("POST", "/api/auth/logout"),
        ],
    )
    def test_requires_auth(self, client, db_session, method, path):
        resp = getattr(client, method.lower())(path, json={})
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"


# =============================================================================
# NON-ADMIN DENIED (403)
# =============================================================================


class TestNonAdminDenied:

    @pytest.mark.parametrize("method,path", ADMIN_ENDPOINTS)
    def test_forbidden(self, client, user_headers, method, path):
        resp = getattr(client, method.lower())(path, json={}, headers=user_headers)
        assert resp.status_code == 403, f"{method} {path} returned {resp.status_code}"
        assert resp.json["error"] == "Admin access required"

    def test_denial_is_recorded(self, client, user, user_headers, db_session):
        client.patch("/api/businesses/1/status", json={"status": "active"}, headers=user_headers)

        event = db_session.query(SecurityEvent).filter_by(event_type="ADMIN_ACCESS_DENIED").one()
        assert event.user_id == user.id
        assert event.success is False
        assert event.resource == "/api/businesses/1/status"
        assert event.action == "PATCH"

    def test_user_cannot_activate_own_business(self, client, user, user_headers, make_business):
        business = make_business(user_id=user.id, status="pending", payment_status="unpaid", is_active=False)
        resp = client.patch(
            f"/api/businesses/{business.id}/status",
            json={"status": "active", "isActive": True},
            headers=user_headers,
        )
        assert resp.status_code == 403
        assert business.is_active is False


# =============================================================================
# ADMIN OPERATIONS
# =============================================================================


class TestAdminOperations:

    def test_activate_business(self, client, admin_headers, make_business):
        business = make_business(status="pending", payment_status="paid", is_active=False)
        resp = client.patch(
            f"/api/businesses/{business.id}/status",
            json={"status": "active", "isActive": True},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json["business"]["lifecycle_state"] == "active"

        listed = client.get("/api/businesses")
        assert [b["id"] for b in listed.json["businesses"]] == [business.id]

    def test_invalid_status_is_400(self, client, admin_headers, make_business):
        business = make_business()
        resp = client.patch(
            f"/api/businesses/{business.id}/status", json={"status": "approved"}, headers=admin_headers
        )
        assert resp.status_code == 400

    def test_missing_business_is_404(self, client, admin_headers, db_session):
        resp = client.patch("/api/businesses/9999/status", json={"status": "active"}, headers=admin_headers)
        assert resp.status_code == 404

    def test_status_without_is_active_keeps_visibility(self, client, admin_headers, make_advertisement):
        ad = make_advertisement()
        resp = client.patch(
            f"/api/advertisements/{ad.id}/status", json={"status": "inactive"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json["advertisement"]["is_active"] is True
        assert resp.json["advertisement"]["status"] == "inactive"

    def test_confirm_payment(self, client, admin_headers, make_business):
        business = make_business(status="pending", payment_status="unpaid", is_active=False)
        resp = client.patch(
            f"/api/admin/businesses/{business.id}/payment-status",
            json={"paymentStatus": "paid"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json["business"]["payment_status"] == "paid"
        assert resp.json["business"]["is_active"] is False
        assert resp.json["business"]["lifecycle_state"] == "pending_review"

    def test_invalid_payment_status(self, client, admin_headers, make_advertisement):
        ad = make_advertisement()
        resp = client.patch(
            f"/api/admin/advertisements/{ad.id}/payment-status",
            json={"paymentStatus": "charged"},
            headers=admin_headers,
        )
        assert resp.status_code == 400

    def test_toggle_franchise(self, client, admin_headers, make_franchise):
        franchise = make_franchise()
        resp = client.patch(
            f"/api/admin/franchises/{franchise.id}/active", json={"isActive": False}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert client.get("/api/franchises").json["franchises"] == []

    def test_admin_lists_include_pending(self, client, admin_headers, make_business):
        make_business(name="Live")
        make_business(name="Pending", status="pending", is_active=False)

        resp = client.get("/api/admin/businesses", headers=admin_headers)
        assert resp.json["count"] == 2

        resp = client.get("/api/admin/businesses?status=pending", headers=admin_headers)
        assert [b["name"] for b in resp.json["businesses"]] == ["Pending"]

    def test_inquiry_inbox(self, client, admin_headers, db_session):
        client.post("/api/contact", json={
            "name": "Pat", "email": "pat@example.com", "subject": "Hello", "message": "Hi there",
        })
        resp = client.get("/api/admin/inquiries", headers=admin_headers)
        assert resp.json["count"] == 1
        inquiry_id = resp.json["inquiries"][0]["id"]

        resp = client.patch(
            f"/api/inquiries/{inquiry_id}/status", json={"status": "replied"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert client.get(f"/api/inquiries/{inquiry_id}", headers=admin_headers).json["inquiry"]["status"] == "replied"
