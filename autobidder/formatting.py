"""Formatting helpers for quote output.

Prices are whole currency units, so amounts are shown without cents
(e.g. '$1,250'). A missing price is shown as 'Price unavailable', never
as '$0', because $0 is a legitimate computed price.
"""

from __future__ import annotations

PRICE_UNAVAILABLE = "Price unavailable"


def format_currency(amount: float) -> str:
    """Format a whole-unit amount with a dollar sign and comma separators."""
    return f"${amount:,.0f}"


def format_price(amount: int | None) -> str:
    """Format a service price, or the unavailable marker when there is none."""
    if amount is None:
        return PRICE_UNAVAILABLE
    return format_currency(amount)


def format_percent(value: float) -> str:
    """Format a percentage, dropping a trailing '.0' (10.0 -> '10%', 8.25 -> '8.25%')."""
    return f"{value:g}%"
