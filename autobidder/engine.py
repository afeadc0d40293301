"""Pricing engine: the entry point that turns answers into quotes.

The PricingEngine runs the full pricing flow for a customer:

1. **Resolve** each selected formula's answers to numbers (hidden and
   malformed inputs contribute 0).
2. **Evaluate** the formula expression in the sandboxed evaluator, giving
   a non-negative whole-unit price or an explicit failure.
3. **Aggregate** the per-service prices into subtotal, bundle discount,
   sales tax and total.
4. **Assemble** the quote record for downstream collaborators.

Every call is pure: the engine holds only a read-only formula store and
evaluator limits, so the same inputs always give the same outputs and
calls may run in parallel.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from autobidder.exceptions import EvaluationError, NonFiniteResultError
from autobidder.models.quote import ServicePricing
from autobidder.pricing.expression import (
    DEFAULT_LIMITS,
    EvaluatorLimits,
    check_syntax,
    evaluate_formula,
    referenced_identifiers,
    substitute_identifiers,
)
from autobidder.pricing.quote import assemble_quote
from autobidder.pricing.resolver import resolve_answers

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autobidder.data.repository import FormulaRepository
    from autobidder.models.formula import Formula
    from autobidder.models.quote import (
        CustomerInfo,
        PricingConfig,
        QuoteRecord,
        ServiceSelection,
    )

logger = logging.getLogger(__name__)

ENGINE_VERSION = "0.1.0"


class FormulaCheck(BaseModel):
    """Builder-time report on whether a formula can be priced."""

    is_valid: bool
    error: str | None = None
    unknown_identifiers: list[str] = Field(default_factory=list)
    unused_variables: list[str] = Field(default_factory=list)
    sample_price: int | None = None


class PricingEngine:
    """Evaluates calculator formulas and assembles multi-service quotes.

    Args:
        repository: Read-only store the engine fetches formulas from.
        limits: Bounds on the size and nesting of formula expressions.

    Example::

        from autobidder.data.repository import FormulaRepository
        from autobidder.data.seed import SEED_FORMULAS

        engine = PricingEngine(FormulaRepository(SEED_FORMULAS))
        price = engine.calculate(formula, {"houseSize": 2000, "stories": "2"})
    """

    def __init__(
        self,
        repository: FormulaRepository,
        limits: EvaluatorLimits = DEFAULT_LIMITS,
    ) -> None:
        self._repository = repository
        self._limits = limits

    @property
    def repository(self) -> FormulaRepository:
        return self._repository

    def calculate(self, formula: Formula, answers: Mapping[str, Any]) -> int:
        """Compute the price of one formula for one set of answers.

        Returns:
            The non-negative price in whole currency units.

        Raises:
            EvaluationError: If the formula cannot be evaluated.
        """
        values = resolve_answers(formula, answers)
        return evaluate_formula(formula.formula, values, self._limits)

    def price_service(
        self,
        formula: Formula,
        answers: Mapping[str, Any],
    ) -> ServicePricing:
        """Price one service, recording a failure instead of raising.

        A failed evaluation gives ``calculated_price=None`` and the error
        message, so the caller can show "price unavailable" rather than $0.
        """
        try:
            price: int | None = self.calculate(formula, answers)
            error = None
        except EvaluationError as exc:
            logger.warning(
                "Formula %d (%s) could not be evaluated: %s",
                formula.id,
                formula.name,
                exc,
            )
            price = None
            error = str(exc)
        return ServicePricing(
            formula_id=formula.id,
            formula_name=formula.name,
            variables=dict(answers),
            calculated_price=price,
            icon=formula.icon,
            error=error,
        )

    def quote(
        self,
        customer: CustomerInfo,
        selections: Sequence[ServiceSelection],
        config: PricingConfig,
        source: str = "Calculator Form",
    ) -> QuoteRecord:
        """Price every selected service and assemble the quote record.

        Raises:
            FormulaNotFoundError: If a selection names an unknown formula.
            QuoteAssemblyError: If no selected service could be priced.
        """
        services = [
            self.price_service(self._repository.require(s.formula_id), s.answers)
            for s in selections
        ]
        return assemble_quote(customer, services, config, source=source)

    def check_formula(self, formula: Formula) -> FormulaCheck:
        """Check a formula the way the builder does before saving it.

        Every known variable is set to 1 to test the syntax, so a formula
        that only divides by zero for those sample values is still valid.
        """
        referenced = referenced_identifiers(formula.formula)
        known = set(formula.value_ids)
        unknown = sorted(referenced - known)
        unused = [
            v.id
            for v in formula.variables
            if v.id not in referenced and referenced.isdisjoint(v.option_references())
        ]

        ones = {variable_id: 1.0 for variable_id in known}
        try:
            check_syntax(substitute_identifiers(formula.formula, ones), self._limits)
        except EvaluationError as exc:
            return FormulaCheck(
                is_valid=False,
                error=str(exc),
                unknown_identifiers=unknown,
                unused_variables=unused,
            )

        sample_price: int | None = None
        try:
            sample_price = evaluate_formula(formula.formula, ones, self._limits)
        except NonFiniteResultError:
            logger.debug("Formula '%s' has no finite sample price", formula.name)

        return FormulaCheck(
            is_valid=True,
            unknown_identifiers=unknown,
            unused_variables=unused,
            sample_price=sample_price,
        )
