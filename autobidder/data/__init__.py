"""Formula store and quote sinks for the Autobidder pricing core."""

from autobidder.data.repository import FormulaRepository
from autobidder.data.sink import InMemoryQuoteSink, QuoteSink

__all__ = [
    "FormulaRepository",
    "InMemoryQuoteSink",
    "QuoteSink",
]
