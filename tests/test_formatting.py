"""Tests for formatting helpers and QuoteRecord summary/export methods."""

from __future__ import annotations

from datetime import datetime

from autobidder.formatting import (
    PRICE_UNAVAILABLE,
    format_currency,
    format_percent,
    format_price,
)
from autobidder.models.quote import (
    CustomerInfo,
    PricingConfig,
    QuoteRecord,
    ServicePricing,
)
from autobidder.pricing.aggregator import summarize_quote

# ---------- Helpers ----------


def _build_record(*prices: int | None, config: PricingConfig | None = None) -> QuoteRecord:
    """Build a QuoteRecord for testing summary/export methods."""
    services = [
        ServicePricing(
            formula_id=i,
            formula_name=name,
            variables={"size": 10 * i},
            calculated_price=price,
            icon="home",
        )
        for i, (name, price) in enumerate(
            zip(["House Washing", "Window Cleaning", "Lawn Care"], prices), start=1
        )
    ]
    if config is None:
        config = PricingConfig(
            show_bundle_discount=True,
            bundle_discount_percent=10,
            enable_sales_tax=True,
            sales_tax_rate=8,
        )
    return QuoteRecord(
        customer=CustomerInfo(
            name="Dana Reyes",
            email="dana@example.com",
            phone="555-0100",
            address="12 Elm St",
        ),
        services=services,
        summary=summarize_quote(services, config),
        created_at=datetime(2026, 3, 1, 9, 30),
    )


# ---------- format_currency / format_price / format_percent ----------


class TestFormatCurrency:
    def test_thousands(self) -> None:
        assert format_currency(1250) == "$1,250"

    def test_small(self) -> None:
        assert format_currency(95) == "$95"

    def test_zero(self) -> None:
        assert format_currency(0) == "$0"

    def test_millions(self) -> None:
        assert format_currency(2_400_000) == "$2,400,000"


class TestFormatPrice:
    def test_missing_price_is_unavailable(self) -> None:
        assert format_price(None) == PRICE_UNAVAILABLE == "Price unavailable"

    def test_zero_price_is_zero_dollars(self) -> None:
        assert format_price(0) == "$0"

    def test_price(self) -> None:
        assert format_price(475) == "$475"


class TestFormatPercent:
    def test_whole(self) -> None:
        assert format_percent(10.0) == "10%"

    def test_fraction(self) -> None:
        assert format_percent(8.25) == "8.25%"


# ---------- QuoteRecord.to_summary_dict ----------


class TestToSummaryDict:
    def test_golden_quote(self) -> None:
        d = _build_record(100, 50).to_summary_dict()
        assert d["customer_name"] == "Dana Reyes"
        assert d["subtotal_formatted"] == "$150"
        assert d["bundle_discount_formatted"] == "-$15"
        assert d["bundle_discount_label"] == "Bundle Discount (10% off)"
        assert d["tax_formatted"] == "$11"
        assert d["total_formatted"] == "$146"
        assert d["num_services"] == 2
        assert d["created_at_formatted"] == "2026-03-01 09:30"

    def test_services_listed_in_order(self) -> None:
        d = _build_record(100, 50).to_summary_dict()
        names = [s["formula_name"] for s in d["services"]]
        assert names == ["House Washing", "Window Cleaning"]
        assert d["services"][0]["price_formatted"] == "$100"

    def test_unavailable_service(self) -> None:
        d = _build_record(100, None).to_summary_dict()
        failed = d["services"][1]
        assert failed["price_formatted"] == "Price unavailable"
        assert failed["price_available"] is False

    def test_no_discount_or_tax_lines_when_not_applied(self) -> None:
        d = _build_record(200, config=PricingConfig()).to_summary_dict()
        assert d["bundle_discount_formatted"] is None
        assert d["bundle_discount_label"] is None
        assert d["tax_formatted"] is None
        assert d["total_formatted"] == "$200"


# ---------- QuoteRecord.to_export_dict ----------


class TestToExportDict:
    def test_lead_fields(self) -> None:
        d = _build_record(100, 50).to_export_dict()
        assert d["name"] == "Dana Reyes"
        assert d["email"] == "dana@example.com"
        assert d["phone"] == "555-0100"
        assert d["address"] == "12 Elm St"
        assert d["notes"] is None
        assert d["source"] == "Calculator Form"

    def test_totals(self) -> None:
        d = _build_record(100, 50).to_export_dict()
        assert d["subtotal"] == 150
        assert d["bundleDiscountAmount"] == 15
        assert d["taxAmount"] == 11
        assert d["totalPrice"] == 146

    def test_services(self) -> None:
        d = _build_record(100, None).to_export_dict()
        assert d["services"][0] == {
            "formulaId": 1,
            "formulaName": "House Washing",
            "variables": {"size": 10},
            "calculatedPrice": 100,
            "icon": "home",
        }
        assert d["services"][1]["calculatedPrice"] is None

    def test_created_at_is_iso(self) -> None:
        d = _build_record(100).to_export_dict()
        assert d["createdAt"] == "2026-03-01T09:30:00"
