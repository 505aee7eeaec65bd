"""
Inquiry router tests.
"""

import pytest

from marketplace.services import inquiry_service
from marketplace.validation import NotFoundError, ValidationError


BASE = {
    "name": "Pat Buyer",
    "email": "Pat@Example.com",
    "subject": "Question",
    "message": "Is this still available?",
}


class TestCreateInquiry:

    def test_general_inquiry(self, db_session):
        inquiry = inquiry_service.create_inquiry(dict(BASE))
        assert inquiry.inquiry_type == "General"
        assert inquiry.status == "pending"
        assert inquiry.email == "pat@example.com"

    def test_franchise_inquiry(self, make_franchise):
        franchise = make_franchise()
        inquiry = inquiry_service.create_inquiry({**BASE, "franchise_id": franchise.id})
        assert inquiry.inquiry_type == "Franchise"
        assert inquiry.to_dict()["inquiry_type"] == "Franchise"

    def test_business_inquiry(self, make_business):
        business = make_business()
        inquiry = inquiry_service.create_business_inquiry(business.id, {
            "name": "Pat", "email": "pat@example.com", "message": "Hi",
        })
        assert inquiry.inquiry_type == "Business"
        assert inquiry.subject == "Business Inquiry"

    def test_franchise_helper_default_subject(self, make_franchise):
        franchise = make_franchise()
        inquiry = inquiry_service.create_franchise_inquiry(franchise.id, {
            "name": "Pat", "email": "pat@example.com", "message": "Hi",
        })
        assert inquiry.subject == "Franchise Inquiry"
        assert inquiry.business_id is None

    def test_both_targets_rejected(self, make_franchise, make_business):
        with pytest.raises(ValidationError):
            inquiry_service.create_inquiry({
                **BASE,
                "franchise_id": make_franchise().id,
                "business_id": make_business().id,
            })

    def test_missing_target_rejected(self, db_session):
        with pytest.raises(NotFoundError):
            inquiry_service.create_inquiry({**BASE, "business_id": 9999})

    def test_status_in_payload_is_ignored(self, db_session):
        inquiry = inquiry_service.create_inquiry({**BASE, "status": "closed"})
        assert inquiry.status == "pending"

    def test_bad_email(self, db_session):
        with pytest.raises(ValidationError):
            inquiry_service.create_inquiry({**BASE, "email": "not-an-email"})

    def test_contact_inquiry_drops_targets(self, make_franchise):
        inquiry = inquiry_service.create_contact_inquiry({**BASE, "franchise_id": make_franchise().id})
        assert inquiry.inquiry_type == "General"


class TestInquiryStatus:

    def test_update(self, db_session):
        inquiry = inquiry_service.create_inquiry(dict(BASE))
        inquiry_service.update_inquiry_status(inquiry.id, "replied")
        assert inquiry_service.get_inquiry(inquiry.id).status == "replied"

    def test_invalid_status(self, db_session):
        inquiry = inquiry_service.create_inquiry(dict(BASE))
        with pytest.raises(ValidationError):
            inquiry_service.update_inquiry_status(inquiry.id, "archived")

    def test_missing(self, db_session):
        with pytest.raises(NotFoundError):
            inquiry_service.update_inquiry_status(9999, "closed")

    def test_list_filters_by_status(self, db_session):
        first = inquiry_service.create_inquiry(dict(BASE))
        second = inquiry_service.create_inquiry(dict(BASE))
        inquiry_service.update_inquiry_status(first.id, "closed")

        assert [i.id for i in inquiry_service.list_inquiries(status="pending")] == [second.id]
        assert {i.id for i in inquiry_service.list_inquiries()} == {first.id, second.id}
