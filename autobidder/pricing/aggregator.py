"""Quote aggregation: subtotal, bundle discount, sales tax, and total.

Rounding happens at each stage, in this order:

1. ``subtotal`` is the sum of service prices (missing or negative prices
   count as 0).
2. ``bundle_discount`` is ``subtotal * percent / 100`` rounded half-up,
   applied only when bundling is enabled and at least two services are
   quoted.
3. ``tax_amount`` is computed on the *rounded* discounted subtotal and
   then rounded half-up.
4. ``total`` is ``subtotal - bundle_discount + tax_amount``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autobidder.models.quote import QuoteSummary
from autobidder.pricing.rounding import clamp_percent, round_half_up

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autobidder.models.quote import PricingConfig, ServicePricing

_MIN_SERVICES_FOR_BUNDLE = 2


def summarize_quote(
    services: Sequence[ServicePricing],
    config: PricingConfig,
) -> QuoteSummary:
    """Aggregate per-service prices into a QuoteSummary.

    The config is assumed to have been validated already; percents are
    clamped to [0, 100] here and nothing else is re-checked.
    """
    subtotal = sum(max(s.calculated_price or 0, 0) for s in services)

    discount_percent = clamp_percent(config.bundle_discount_percent)
    bundle_applies = (
        config.show_bundle_discount and len(services) >= _MIN_SERVICES_FOR_BUNDLE
    )
    bundle_discount = (
        round_half_up(subtotal * (discount_percent / 100)) if bundle_applies else 0
    )
    discounted_subtotal = subtotal - bundle_discount

    tax_rate = clamp_percent(config.sales_tax_rate)
    tax_amount = (
        round_half_up(discounted_subtotal * (tax_rate / 100))
        if config.enable_sales_tax
        else 0
    )

    return QuoteSummary(
        subtotal=subtotal,
        bundle_discount=bundle_discount,
        discounted_subtotal=discounted_subtotal,
        tax_amount=tax_amount,
        total=discounted_subtotal + tax_amount,
        bundle_discount_percent=discount_percent if bundle_applies else 0.0,
        sales_tax_rate=tax_rate if config.enable_sales_tax else 0.0,
        service_count=len(services),
    )
