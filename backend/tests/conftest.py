"""
Pytest fixtures for marketplace backend tests.

Provides test database setup, user/admin fixtures, and test client.
"""

import pytest
from marketplace import create_app
from marketplace.extensions import db
from marketplace.models import User, Franchise, Business, Advertisement
from marketplace.services.auth_service import hash_password
from marketplace.services import session_service


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'BCRYPT_ROUNDS': 4,
        'SENDGRID_API_KEY': '',
        'EMAIL_TEST_MODE': False,
        'PASSWORD_RESET_INSECURE_LINK_FALLBACK': False,
        'PUBLIC_BASE_URL': 'http://testserver',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def user(db_session):
    """Regular marketplace account."""
    user = User(
        email="seller@example.com",
        password_hash=hash_password("secret123"),
        first_name="Sam",
        last_name="Seller",
        role="user",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope='function')
def other_user(db_session):
    user = User(
        email="buyer@example.com",
        password_hash=hash_password("secret123"),
        role="user",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope='function')
def admin_user(db_session):
    user = User(
        email="admin@example.com",
        password_hash=hash_password("adminpass"),
        role="admin",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope='function')
def user_headers(user):
    _, token = session_service.create_session(user.id)
    return auth_headers(token)


@pytest.fixture(scope='function')
def other_user_headers(other_user):
    _, token = session_service.create_session(other_user.id)
    return auth_headers(token)


@pytest.fixture(scope='function')
def admin_headers(admin_user):
    _, token = session_service.create_session(admin_user.id)
    return auth_headers(token)


@pytest.fixture(scope='function')
def make_franchise(db_session):
    """Factory: insert a franchise row directly."""
    def _make(**overrides):
        data = {
            "name": "Test Franchise",
            "category": "Coffee",
            "country": "USA",
            "state": "California",
            "is_active": True,
        }
        data.update(overrides)
        franchise = Franchise(**data)
        db_session.add(franchise)
        db_session.commit()
        return franchise
    return _make


@pytest.fixture(scope='function')
def make_business(db_session):
    """Factory: insert a business row directly (defaults to a live listing)."""
    def _make(**overrides):
        data = {
            "name": "Test Business",
            "category": "Technology",
            "country": "USA",
            "state": "California",
            "price": 100000,
            "status": "active",
            "payment_status": "paid",
            "is_active": True,
        }
        data.update(overrides)
        business = Business(**data)
        db_session.add(business)
        db_session.commit()
        return business
    return _make


@pytest.fixture(scope='function')
def make_advertisement(db_session):
    def _make(**overrides):
        data = {
            "title": "Test Ad",
            "image_url": "https://example.com/ad.png",
            "status": "active",
            "payment_status": "paid",
            "is_active": True,
        }
        data.update(overrides)
        ad = Advertisement(**data)
        db_session.add(ad)
        db_session.commit()
        return ad
    return _make


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}
