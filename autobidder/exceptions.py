"""Custom exception hierarchy for the Autobidder pricing core."""

from __future__ import annotations


class AutobidderError(Exception):
    """Base exception for all Autobidder errors."""


class EvaluationError(AutobidderError):
    """Raised when a formula expression cannot produce a price.

    A failed evaluation means "no price available". It is never the same
    thing as a price of 0.
    """


class FormulaSyntaxError(EvaluationError):
    """Raised when the expression text is not valid arithmetic."""


class UnresolvedIdentifierError(EvaluationError):
    """Raised when an identifier is left over after substitution."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Unknown identifier '{identifier}' in formula")
        self.identifier = identifier


class NonFiniteResultError(EvaluationError):
    """Raised on division by zero or an infinite/NaN result."""


class ExpressionTooComplexError(EvaluationError):
    """Raised when an expression exceeds the evaluator's length or depth limits."""


class ConfigurationRejectedError(AutobidderError):
    """Raised when pricing or application configuration is out of range."""


class FormulaNotFoundError(AutobidderError):
    """Raised when a formula id or embed id is not in the formula store."""


class QuoteAssemblyError(AutobidderError):
    """Raised when a quote has no service with a successfully evaluated price."""
