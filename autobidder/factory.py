"""Factory functions for creating pre-configured PricingEngine instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

from autobidder.data.repository import FormulaRepository
from autobidder.data.seed import SEED_FORMULAS
from autobidder.engine import PricingEngine

if TYPE_CHECKING:
    from autobidder.config import Settings


def create_default_engine(settings: Settings | None = None) -> PricingEngine:
    """Create a PricingEngine wired up with the seed calculators.

    Args:
        settings: Optional settings supplying evaluator limits. Defaults
            are used when omitted.

    Returns:
        A PricingEngine ready to price quotes.

    Example::

        from autobidder import create_default_engine

        engine = create_default_engine()
        formula = engine.repository.require(1)
        price = engine.calculate(formula, {"houseSize": 2000})
    """
    repository = FormulaRepository(SEED_FORMULAS)
    if settings is None:
        return PricingEngine(repository)
    return PricingEngine(repository, limits=settings.evaluator_limits)
