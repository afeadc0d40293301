"""Quote sinks: where assembled quote records are handed off."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from autobidder.models.quote import QuoteRecord

logger = logging.getLogger(__name__)


class QuoteSink(Protocol):
    """Downstream consumer of quote records (persistence, email, CRM)."""

    def submit(self, record: QuoteRecord) -> None: ...


class InMemoryQuoteSink:
    """Quote sink that keeps submitted records in a list."""

    def __init__(self) -> None:
        self._records: list[QuoteRecord] = []

    def submit(self, record: QuoteRecord) -> None:
        self._records.append(record)
        logger.info(
            "Quote received for %s: %d service(s), total %d",
            record.customer.email,
            record.summary.service_count,
            record.summary.total,
        )

    def list_records(self) -> list[QuoteRecord]:
        return list(self._records)
