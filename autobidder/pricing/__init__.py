"""Pricing pipeline: resolve answers, evaluate formulas, aggregate quotes."""

from autobidder.pricing.aggregator import summarize_quote
from autobidder.pricing.conditions import is_variable_visible
from autobidder.pricing.expression import (
    DEFAULT_LIMITS,
    EvaluatorLimits,
    evaluate_expression,
    evaluate_formula,
    referenced_identifiers,
    substitute_identifiers,
)
from autobidder.pricing.quote import assemble_quote
from autobidder.pricing.resolver import resolve_answers, resolve_variable

__all__ = [
    "DEFAULT_LIMITS",
    "EvaluatorLimits",
    "assemble_quote",
    "evaluate_expression",
    "evaluate_formula",
    "is_variable_visible",
    "referenced_identifiers",
    "resolve_answers",
    "resolve_variable",
    "substitute_identifiers",
    "summarize_quote",
]
