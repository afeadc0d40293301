"""Autobidder pricing core.

Usage::

    from autobidder import create_default_engine, CustomerInfo, PricingConfig

    engine = create_default_engine()
    record = engine.quote(customer, selections, PricingConfig())
"""

from autobidder.engine import FormulaCheck, PricingEngine
from autobidder.exceptions import (
    AutobidderError,
    ConfigurationRejectedError,
    EvaluationError,
    FormulaNotFoundError,
    QuoteAssemblyError,
)
from autobidder.factory import create_default_engine
from autobidder.models.enums import VariableType
from autobidder.models.formula import Formula, Variable, VariableOption
from autobidder.models.quote import (
    CustomerInfo,
    PricingConfig,
    QuoteRecord,
    QuoteSummary,
    ServicePricing,
    ServiceSelection,
)

__all__ = [
    "AutobidderError",
    "ConfigurationRejectedError",
    "CustomerInfo",
    "EvaluationError",
    "Formula",
    "FormulaCheck",
    "FormulaNotFoundError",
    "PricingConfig",
    "PricingEngine",
    "QuoteAssemblyError",
    "QuoteRecord",
    "QuoteSummary",
    "ServicePricing",
    "ServiceSelection",
    "Variable",
    "VariableOption",
    "VariableType",
    "create_default_engine",
]
