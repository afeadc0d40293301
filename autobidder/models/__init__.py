"""Domain models for the Autobidder pricing core."""

from autobidder.models.enums import ConditionOperator, VariableType
from autobidder.models.formula import (
    ConditionalLogic,
    Formula,
    Variable,
    VariableOption,
)
from autobidder.models.quote import (
    CustomerInfo,
    PricingConfig,
    QuoteRecord,
    QuoteSummary,
    ServicePricing,
    ServiceSelection,
)

__all__ = [
    "ConditionOperator",
    "ConditionalLogic",
    "CustomerInfo",
    "Formula",
    "PricingConfig",
    "QuoteRecord",
    "QuoteSummary",
    "ServicePricing",
    "ServiceSelection",
    "Variable",
    "VariableOption",
    "VariableType",
]
