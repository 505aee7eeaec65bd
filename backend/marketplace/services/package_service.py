# Overview: Listing package tiers and their checkout prices.

"""
Package tiers a seller or advertiser picks when submitting a listing.

The price is what the checkout page charges (whole USD). Payment itself is
handled outside this service; payment_status on the listing is updated by
an admin once the processor confirms it.
"""

from __future__ import annotations

from ..validation import ValidationError


PACKAGE_TIERS = ("test", "basic", "premium", "enterprise")

BUSINESS_PACKAGE_PRICES = {
    "test": 1,
    "basic": 150,
    "premium": 300,
    "enterprise": 500,
}

ADVERTISEMENT_PACKAGE_PRICES = {
    "test": 1,
    "basic": 100,
    "premium": 250,
    "enterprise": 500,
}

# Charged when a listing arrives without a recognised tier
DEFAULT_PACKAGE_PRICE = 100

_PRICE_TABLES = {
    "business": BUSINESS_PACKAGE_PRICES,
    "advertisement": ADVERTISEMENT_PACKAGE_PRICES,
}


def validate_package(tier: str | None) -> str | None:
    if tier is None:
        return None
    normalized = tier.strip().lower()
    if normalized not in PACKAGE_TIERS:
        raise ValidationError(
            f"Invalid package '{tier}'. Must be one of: {', '.join(PACKAGE_TIERS)}"
        )
    return normalized


def quote_package(kind: str, tier: str | None) -> dict:
    if kind not in _PRICE_TABLES:
        raise ValidationError(f"Unknown listing kind '{kind}'")
    prices = _PRICE_TABLES[kind]
    amount = prices.get((tier or "").lower(), DEFAULT_PACKAGE_PRICE)
    label = "Business Listing Package" if kind == "business" else "Advertisement Package"
    return {
        "kind": kind,
        "package": tier,
        "amount": amount,
        "currency": "usd",
        "description": f"{(tier or 'standard').capitalize()} {label}",
    }


def package_catalog() -> dict:
    return {
        kind: [{"package": tier, "amount": prices[tier]} for tier in PACKAGE_TIERS]
        for kind, prices in _PRICE_TABLES.items()
    }
