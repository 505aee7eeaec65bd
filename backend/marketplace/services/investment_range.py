# Overview: Parses human investment bands ("$100K-$250K") and tests interval overlap.

"""
Investment range parsing for franchise search.

A range string has the shape "<amount><unit>-<amount><unit>":

    "$10K-$50K"   -> 10_000 .. 50_000
    "$500K-$1M"   -> 500_000 .. 1_000_000
    "0-$10K"      -> 0 .. 10_000
    "1500-2500"   -> 1_500 .. 2_500

K multiplies by one thousand, M by one million, no suffix is the literal
amount. A leading "$", surrounding whitespace and thousands separators are
tolerated.

Malformed input never raises: parse_investment_range() returns None and the
caller skips the price filter, so a bad range widens the search instead of
failing it.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional


UNIT_MULTIPLIERS = {
    "": 1,
    "K": 1_000,
    "M": 1_000_000,
}

_AMOUNT_RE = re.compile(
    r"""^\s*
        \$?\s*
        (?P<number>\d{1,3}(?:,\d{3})+|\d+)(?:\.(?P<fraction>\d+))?
        \s*(?P<unit>[KkMm]?)
        \s*$""",
    re.VERBOSE,
)


class InvestmentRange(NamedTuple):
    min: int
    max: int

    def overlaps(self, lo: int, hi: int) -> bool:
        """
        Inclusive interval overlap with [lo, hi].

        A listing that only partly falls inside the requested band still
        qualifies: lo <= self.max and hi >= self.min.
        """
        return lo <= self.max and hi >= self.min


def parse_amount(text: str) -> Optional[int]:
    """'$250K' -> 250000, '$1.5M' -> 1500000, '7500' -> 7500; None if not an amount."""
    match = _AMOUNT_RE.match(text)
    if match is None:
        return None

    whole = int(match.group("number").replace(",", ""))
    fraction = match.group("fraction") or ""
    multiplier = UNIT_MULTIPLIERS[match.group("unit").upper()]

    value = whole * multiplier
    if fraction:
        # Fractions only make sense with a unit ("$1.5M"); round to whole dollars
        value += round(int(fraction) * multiplier / 10 ** len(fraction))
    return value


def parse_investment_range(text: Optional[str]) -> Optional[InvestmentRange]:
    """
    Parse a range string into numeric bounds.

    Returns None ("no constraint") for anything that is not exactly two
    amounts joined by a single "-", or whose lower bound exceeds the upper.
    """
    if not text or not isinstance(text, str):
        return None

    parts = text.split("-")
    if len(parts) != 2:
        return None

    lo = parse_amount(parts[0])
    hi = parse_amount(parts[1])
    if lo is None or hi is None or lo > hi:
        return None

    return InvestmentRange(min=lo, max=hi)
