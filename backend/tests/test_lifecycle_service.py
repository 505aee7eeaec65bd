"""
Moderation and payment lifecycle tests.

Verifies:
- Only pending/active/inactive and unpaid/paid/refunded are accepted
- is_active changes only when supplied
- Marking paid never activates a listing
- lifecycle_state derives one tag from the three flags
"""

import pytest

from marketplace.models import Business
from marketplace.services import lifecycle_service
from marketplace.services.lifecycle_service import LifecycleError
from marketplace.validation import NotFoundError, ValidationError


class TestStatusUpdates:

    def test_invalid_status_rejected_and_nothing_written(self, make_business):
        business = make_business(status="pending", is_active=False)
        with pytest.raises(ValidationError):
            lifecycle_service.update_business_status(business.id, "approved")
        assert business.status == "pending"

    def test_invalid_status_is_a_lifecycle_error(self):
        with pytest.raises(LifecycleError):
            lifecycle_service.validate_status("published")

    def test_status_without_is_active_leaves_visibility(self, make_business):
        business = make_business(status="active", is_active=True)
        lifecycle_service.update_business_status(business.id, "inactive")
        assert business.status == "inactive"
        assert business.is_active is True
        assert not lifecycle_service.is_consistent(business)

    def test_status_with_is_active(self, make_business):
        business = make_business(status="pending", is_active=False)
        lifecycle_service.update_business_status(business.id, "active", is_active=True)
        assert (business.status, business.is_active) == ("active", True)
        assert lifecycle_service.lifecycle_state(business) == "active"

    def test_non_bool_is_active_rejected(self, make_business):
        business = make_business()
        with pytest.raises(ValidationError):
            lifecycle_service.update_business_status(business.id, "active", is_active="yes")

    def test_any_status_to_any_status(self, make_advertisement):
        ad = make_advertisement(status="inactive", is_active=False)
        for status in ("pending", "active", "inactive", "active"):
            lifecycle_service.update_advertisement_status(ad.id, status)
            assert ad.status == status

    def test_missing_listing(self, db_session):
        with pytest.raises(NotFoundError):
            lifecycle_service.update_business_status(9999, "active")
        with pytest.raises(NotFoundError):
            lifecycle_service.update_advertisement_status(9999, "active")


class TestPaymentStatus:

    def test_paid_does_not_activate(self, make_business):
        business = make_business(status="pending", payment_status="unpaid", is_active=False)
        lifecycle_service.update_business_payment_status(business.id, "paid")
        assert business.payment_status == "paid"
        assert business.is_active is False
        assert business.lifecycle_state == "pending_review"

    def test_invalid_payment_status(self, make_advertisement):
        ad = make_advertisement()
        with pytest.raises(ValidationError):
            lifecycle_service.update_advertisement_payment_status(ad.id, "charged")

    def test_refund(self, make_advertisement):
        ad = make_advertisement()
        lifecycle_service.update_advertisement_payment_status(ad.id, "refunded")
        assert ad.lifecycle_state == "refunded"


class TestLifecycleState:

    @pytest.mark.parametrize(
        "status,payment_status,is_active,expected",
        [
            ("pending", "unpaid", False, "pending_payment"),
            ("pending", "paid", False, "pending_review"),
            ("active", "paid", True, "active"),
            ("inactive", "paid", False, "inactive"),
            ("active", "refunded", True, "refunded"),
            ("pending", "paid", True, "active"),
        ],
    )
    def test_derived_state(self, status, payment_status, is_active, expected):
        business = Business(status=status, payment_status=payment_status, is_active=is_active)
        assert business.lifecycle_state == expected

    def test_flags_consistent(self):
        assert Business(status="active", is_active=True).flags_consistent
        assert Business(status="inactive", is_active=False).flags_consistent
        assert not Business(status="pending", is_active=True).flags_consistent


def test_pending_queue(make_business, make_advertisement):
    pending = make_business(name="P", status="pending", is_active=False)
    make_business(name="L")
    ad = make_advertisement(status="pending", is_active=False)

    queue = lifecycle_service.get_pending_queue()
    assert [b.id for b in queue["businesses"]] == [pending.id]
    assert [a.id for a in queue["advertisements"]] == [ad.id]
