# Overview: Pure filter predicates for franchise and business search.

"""
Listing search filters.

Every field is optional. A field that is unset, blank, or holds the
placeholder a search form shows before the user picks anything
("All Business Categories", "Any Country", "Any State", "Price Range") is
ignored. All remaining fields must match (AND). Category, country and state
compare with exact, case-sensitive equality.

Price works differently per listing type:
- Franchises span an investment band, so the requested price range must
  overlap [investment_min, investment_max] (see investment_range.py).
- Businesses are sold at a fixed ask, so max_price is a plain ceiling and a
  business without a price is never excluded by it.

matches() has no side effects and needs nothing but attribute access on the
listing, so it works on ORM rows and plain objects alike.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..validation import ValidationError
from .investment_range import parse_investment_range


CATEGORY_PLACEHOLDER = "All Business Categories"
COUNTRY_PLACEHOLDER = "Any Country"
STATE_PLACEHOLDER = "Any State"
PRICE_RANGE_PLACEHOLDER = "Price Range"

NO_OP_VALUES = {
    "category": CATEGORY_PLACEHOLDER,
    "country": COUNTRY_PLACEHOLDER,
    "state": STATE_PLACEHOLDER,
    "price_range": PRICE_RANGE_PLACEHOLDER,
}


@dataclass(frozen=True)
class FranchiseFilters:
    category: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    price_range: Optional[str] = None


@dataclass(frozen=True)
class BusinessFilters:
    category: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    max_price: Optional[int] = None


ListingFilters = Union[FranchiseFilters, BusinessFilters]


def is_active_filter(field_name: str, value: Any) -> bool:
    """False when the value means "do not filter on this field"."""
    if value is None:
        return False
    if isinstance(value, str):
        if not value.strip():
            return False
        if value == NO_OP_VALUES.get(field_name):
            return False
    return True


def _location_matches(listing: Any, filters: ListingFilters) -> bool:
    for field_name in ("category", "country", "state"):
        wanted = getattr(filters, field_name)
        if is_active_filter(field_name, wanted) and getattr(listing, field_name) != wanted:
            return False
    return True


def franchise_matches(franchise: Any, filters: FranchiseFilters) -> bool:
    if not _location_matches(franchise, filters):
        return False

    if is_active_filter("price_range", filters.price_range):
        wanted = parse_investment_range(filters.price_range)
        lo, hi = franchise.investment_min, franchise.investment_max
        # Malformed range or a franchise without both bounds: price is not applied
        if wanted is not None and lo is not None and hi is not None:
            if not wanted.overlaps(lo, hi):
                return False

    return True


def business_matches(business: Any, filters: BusinessFilters) -> bool:
    if not _location_matches(business, filters):
        return False

    if filters.max_price is not None and business.price is not None:
        if business.price > filters.max_price:
            return False

    return True


def matches(listing: Any, filters: ListingFilters) -> bool:
    """Does the listing satisfy every supplied filter?"""
    if isinstance(filters, FranchiseFilters):
        return franchise_matches(listing, filters)
    if isinstance(filters, BusinessFilters):
        return business_matches(listing, filters)
    raise TypeError(f"Unsupported filter type: {type(filters).__name__}")


# ---------------------------------------------------------------------------
# Building filters from query-string arguments
# ---------------------------------------------------------------------------

def _arg(args: Mapping[str, Any], *names: str) -> Optional[str]:
    for name in names:
        value = args.get(name)
        if value is not None:
            return value
    return None


def parse_franchise_filters(args: Mapping[str, Any]) -> FranchiseFilters:
    return FranchiseFilters(
        category=_arg(args, "category"),
        country=_arg(args, "country"),
        state=_arg(args, "state"),
        price_range=_arg(args, "priceRange", "price_range"),
    )


def parse_max_price(raw: Any) -> Optional[int]:
    """
    Query-string ceiling -> int. Blank means unset; anything that is not a
    non-negative whole number is a client error.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError("maxPrice must be a whole number")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip().replace(",", "")
        if not text:
            return None
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("maxPrice must be a whole number")
        value = int(text)
    if value < 0:
        raise ValidationError("maxPrice must be >= 0")
    return value


def parse_business_filters(args: Mapping[str, Any]) -> BusinessFilters:
    return BusinessFilters(
        category=_arg(args, "category"),
        country=_arg(args, "country"),
        state=_arg(args, "state"),
        max_price=parse_max_price(_arg(args, "maxPrice", "max_price")),
    )
