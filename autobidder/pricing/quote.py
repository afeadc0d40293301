"""Assembly of the quote record handed to downstream collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from autobidder.exceptions import QuoteAssemblyError
from autobidder.models.quote import QuoteRecord
from autobidder.pricing.aggregator import summarize_quote

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autobidder.models.quote import CustomerInfo, PricingConfig, ServicePricing


def assemble_quote(
    customer: CustomerInfo,
    services: Sequence[ServicePricing],
    config: PricingConfig,
    source: str = "Calculator Form",
) -> QuoteRecord:
    """Build a QuoteRecord from priced services.

    Services whose price is unavailable are kept in the record so the
    business sees what was requested.

    Raises:
        QuoteAssemblyError: If no service has a successfully evaluated price.
    """
    if not any(s.price_available for s in services):
        msg = "A quote needs at least one service with an available price"
        raise QuoteAssemblyError(msg)
    return QuoteRecord(
        customer=customer,
        services=list(services),
        summary=summarize_quote(services, config),
        source=source,
    )
