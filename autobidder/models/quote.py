"""Quote output models: per-service prices, pricing config, and lead records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from autobidder.exceptions import ConfigurationRejectedError

# camelCase keys used by stored calculator styling -> PricingConfig fields
_STYLING_KEYS: dict[str, str] = {
    "showBundleDiscount": "show_bundle_discount",
    "bundleDiscountPercent": "bundle_discount_percent",
    "enableSalesTax": "enable_sales_tax",
    "salesTaxRate": "sales_tax_rate",
}


class ServiceSelection(BaseModel):
    """A customer's answers for one selected calculator."""

    formula_id: int
    answers: dict[str, Any] = Field(default_factory=dict)


class ServicePricing(BaseModel):
    """The evaluated price for one formula given one set of answers.

    ``calculated_price`` is ``None`` when the formula could not be
    evaluated. That is "price unavailable", which is distinct from a
    legitimately computed price of 0.
    """

    formula_id: int
    formula_name: str
    variables: dict[str, Any] = Field(default_factory=dict)
    calculated_price: int | None = None
    icon: str | None = None
    error: str | None = None

    @property
    def price_available(self) -> bool:
        return self.calculated_price is not None


class PricingConfig(BaseModel):
    """Discount and tax options applied when aggregating a quote."""

    model_config = ConfigDict(allow_inf_nan=False)

    show_bundle_discount: bool = False
    bundle_discount_percent: float = Field(default=0.0, ge=0, le=100)
    enable_sales_tax: bool = False
    sales_tax_rate: float = Field(default=0.0, ge=0, le=100)

    @classmethod
    def from_styling(cls, styling: Mapping[str, Any]) -> PricingConfig:
        """Build a config from a calculator's camelCase styling options.

        Unrecognised styling keys are ignored.

        Raises:
            ConfigurationRejectedError: If a recognised option is out of range.
        """
        values = {
            field: styling[key] for key, field in _STYLING_KEYS.items() if key in styling
        }
        try:
            return cls(**values)
        except ValidationError as exc:
            msg = f"Invalid pricing configuration: {exc.error_count()} error(s)"
            raise ConfigurationRejectedError(msg) from exc


class QuoteSummary(BaseModel):
    """Aggregate totals over the services in a quote, in whole currency units."""

    subtotal: int
    bundle_discount: int = 0
    discounted_subtotal: int
    tax_amount: int = 0
    total: int
    bundle_discount_percent: float = 0.0
    sales_tax_rate: float = 0.0
    service_count: int


class CustomerInfo(BaseModel):
    """Contact details captured alongside a quote."""

    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    notes: str | None = None

    @field_validator("name", "email")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "must not be blank"
            raise ValueError(msg)
        return v


class QuoteRecord(BaseModel):
    """A submitted quote ready for the persistence and notification layer."""

    customer: CustomerInfo
    services: list[ServicePricing]
    summary: QuoteSummary
    source: str = "Calculator Form"
    created_at: datetime = Field(default_factory=datetime.now)

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat dict of display strings for the quote screen."""
        from autobidder.formatting import format_currency, format_percent, format_price

        summary = self.summary
        return {
            "customer_name": self.customer.name,
            "services": [
                {
                    "formula_name": s.formula_name,
                    "price_formatted": format_price(s.calculated_price),
                    "price_available": s.price_available,
                }
                for s in self.services
            ],
            "subtotal_formatted": format_currency(summary.subtotal),
            "bundle_discount_formatted": (
                f"-{format_currency(summary.bundle_discount)}"
                if summary.bundle_discount
                else None
            ),
            "bundle_discount_label": (
                f"Bundle Discount ({format_percent(summary.bundle_discount_percent)} off)"
                if summary.bundle_discount
                else None
            ),
            "tax_formatted": (
                format_currency(summary.tax_amount) if summary.tax_amount else None
            ),
            "total_formatted": format_currency(summary.total),
            "num_services": summary.service_count,
            "created_at_formatted": self.created_at.strftime("%Y-%m-%d %H:%M"),
        }

    def to_export_dict(self) -> dict[str, Any]:
        """Produce the camelCase lead payload consumed by CRM and webhook sinks."""
        return {
            "name": self.customer.name,
            "email": self.customer.email,
            "phone": self.customer.phone,
            "address": self.customer.address,
            "notes": self.customer.notes,
            "source": self.source,
            "services": [
                {
                    "formulaId": s.formula_id,
                    "formulaName": s.formula_name,
                    "variables": s.variables,
                    "calculatedPrice": s.calculated_price,
                    "icon": s.icon,
                }
                for s in self.services
            ],
            "subtotal": self.summary.subtotal,
            "bundleDiscountAmount": self.summary.bundle_discount,
            "taxAmount": self.summary.tax_amount,
            "totalPrice": self.summary.total,
            "createdAt": self.created_at.isoformat(),
        }
