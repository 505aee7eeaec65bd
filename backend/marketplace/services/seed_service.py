# Overview: Sample catalogue data for development databases.

from ..extensions import db
from ..models import Franchise, Business
from . import listing_service, lifecycle_service


SAMPLE_FRANCHISES = [
    {
        "name": "MILKSTER",
        "description": "Premium coffee franchise with specialty drinks",
        "category": "Coffee",
        "country": "USA",
        "state": "California",
        "investment_range": "$50K-$100K",
        "investment_min": 50000,
        "investment_max": 100000,
        "contact_email": "info@milkster.com",
    },
    {
        "name": "BrightStar Care",
        "description": "Healthcare and senior care services",
        "category": "Health, Beauty & Nutrition",
        "country": "USA",
        "state": "Texas",
        "investment_range": "$250K-$500K",
        "investment_min": 250000,
        "investment_max": 500000,
        "contact_email": "franchise@brightstarcare.com",
    },
    {
        "name": "College Hunks Hauling Junk and Moving",
        "description": "Professional moving and junk removal services",
        "category": "Moving Services",
        "country": "USA",
        "state": "Florida",
        "investment_range": "$100K-$250K",
        "investment_min": 100000,
        "investment_max": 250000,
        "contact_email": "franchise@collegehunks.com",
    },
    {
        "name": "Home Team Inspection Service",
        "description": "Professional home inspection services",
        "category": "Home & Garden",
        "country": "USA",
        "state": "Georgia",
        "investment_range": "$50K-$100K",
        "investment_min": 50000,
        "investment_max": 100000,
        "contact_email": "franchise@hometeam.com",
    },
    {
        "name": "Mr. Handyman",
        "description": "Professional handyman and repair services",
        "category": "Home & Garden",
        "country": "USA",
        "state": "Ohio",
        "investment_range": "$100K-$250K",
        "investment_min": 100000,
        "investment_max": 250000,
        "contact_email": "franchise@mrhandyman.com",
    },
    {
        "name": "Mr. Rooter Plumbing",
        "description": "Professional plumbing services",
        "category": "Home & Garden",
        "country": "USA",
        "state": "Michigan",
        "investment_range": "$250K-$500K",
        "investment_min": 250000,
        "investment_max": 500000,
        "contact_email": "franchise@mrrooter.com",
    },
    {
        "name": "Sport Clips",
        "description": "Men's hair salon franchise",
        "category": "Health, Beauty & Nutrition",
        "country": "USA",
        "state": "Colorado",
        "investment_range": "$100K-$250K",
        "investment_min": 100000,
        "investment_max": 250000,
        "contact_email": "franchise@sportclips.com",
    },
    {
        "name": "Supercuts",
        "description": "Affordable hair salon chain",
        "category": "Health, Beauty & Nutrition",
        "country": "USA",
        "state": "Washington",
        "investment_range": "$100K-$250K",
        "investment_min": 100000,
        "investment_max": 250000,
        "contact_email": "franchise@supercuts.com",
    },
]

SAMPLE_BUSINESSES = [
    {
        "name": "Downtown Coffee Shop",
        "description": "Established coffee shop in prime downtown location",
        "category": "Food & Beverage",
        "country": "USA",
        "state": "New York",
        "price": 125000,
        "contact_email": "seller@downtowncoffee.com",
    },
    {
        "name": "Tech Consulting Firm",
        "description": "Growing IT consulting business with established client base",
        "category": "Technology",
        "country": "USA",
        "state": "California",
        "price": 350000,
        "contact_email": "seller@techconsult.com",
    },
]


def seed_sample_listings() -> dict:
    """
    Insert the sample catalogue. Idempotent: rows are matched by name.

    Sample businesses go through the normal pending path and are then
    approved, so they end up paid / active / visible.
    """
    franchises = 0
    for data in SAMPLE_FRANCHISES:
        if db.session.query(Franchise).filter_by(name=data["name"]).first():
            continue
        listing_service.create_franchise(data)
        franchises += 1

    businesses = 0
    for data in SAMPLE_BUSINESSES:
        if db.session.query(Business).filter_by(name=data["name"]).first():
            continue
        business = listing_service.create_business(data)
        lifecycle_service.update_business_payment_status(business.id, "paid")
        lifecycle_service.update_business_status(business.id, "active", is_active=True)
        businesses += 1

    return {"franchises": franchises, "businesses": businesses}
