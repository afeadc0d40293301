"""Tests for quote aggregation: subtotal, bundle discount, tax, total."""

from __future__ import annotations

from autobidder.models.quote import PricingConfig, ServicePricing
from autobidder.pricing.aggregator import summarize_quote
from autobidder.pricing.rounding import clamp_percent, round_half_up


def _services(*prices: int | None) -> list[ServicePricing]:
    return [
        ServicePricing(formula_id=i, formula_name=f"Service {i}", calculated_price=p)
        for i, p in enumerate(prices, start=1)
    ]


def _config(**overrides: object) -> PricingConfig:
    defaults: dict[str, object] = {
        "show_bundle_discount": True,
        "bundle_discount_percent": 10,
        "enable_sales_tax": True,
        "sales_tax_rate": 8,
    }
    defaults.update(overrides)
    return PricingConfig(**defaults)  # type: ignore[arg-type]


class TestGoldenValues:
    def test_two_services_with_discount_and_tax(self) -> None:
        """[100, 50], 10% bundle, 8% tax -> 150 / 15 / 135 / 11 / 146."""
        summary = summarize_quote(_services(100, 50), _config())
        assert summary.subtotal == 150
        assert summary.bundle_discount == 15
        assert summary.discounted_subtotal == 135
        assert summary.tax_amount == 11  # round(10.8)
        assert summary.total == 146

    def test_single_service_gets_no_bundle_discount(self) -> None:
        summary = summarize_quote(
            _services(200), _config(enable_sales_tax=False)
        )
        assert summary.bundle_discount == 0
        assert summary.total == 200
        assert summary.bundle_discount_percent == 0.0

    def test_tax_computed_on_rounded_discounted_base(self) -> None:
        # discount = round(105 * 0.05) = round(5.25) = 5; base 100; tax 7.7 -> 8
        summary = summarize_quote(
            _services(55, 50),
            _config(bundle_discount_percent=5, sales_tax_rate=7.7),
        )
        assert summary.bundle_discount == 5
        assert summary.discounted_subtotal == 100
        assert summary.tax_amount == 8
        assert summary.total == 108


class TestToggles:
    def test_bundle_disabled(self) -> None:
        summary = summarize_quote(
            _services(100, 50), _config(show_bundle_discount=False)
        )
        assert summary.bundle_discount == 0
        assert summary.tax_amount == 12  # round(150 * 0.08)
        assert summary.total == 162

    def test_tax_disabled(self) -> None:
        summary = summarize_quote(_services(100, 50), _config(enable_sales_tax=False))
        assert summary.tax_amount == 0
        assert summary.sales_tax_rate == 0.0
        assert summary.total == 135

    def test_default_config_is_plain_sum(self) -> None:
        summary = summarize_quote(_services(100, 50, 25), PricingConfig())
        assert summary.subtotal == summary.total == 175
        assert summary.service_count == 3


class TestEdgeCases:
    def test_missing_prices_count_as_zero(self) -> None:
        summary = summarize_quote(_services(100, None), _config(enable_sales_tax=False))
        assert summary.subtotal == 100
        # Two services were quoted, so bundling still applies
        assert summary.bundle_discount == 10

    def test_negative_prices_count_as_zero(self) -> None:
        summary = summarize_quote(_services(100, -40), PricingConfig())
        assert summary.subtotal == 100

    def test_no_services(self) -> None:
        summary = summarize_quote([], _config())
        assert summary.subtotal == 0
        assert summary.total == 0

    def test_percents_are_clamped(self) -> None:
        # Bypass validation to simulate an unvalidated config object
        config = PricingConfig.model_construct(
            show_bundle_discount=True,
            bundle_discount_percent=150.0,
            enable_sales_tax=True,
            sales_tax_rate=-5.0,
        )
        summary = summarize_quote(_services(100, 50), config)
        assert summary.bundle_discount == 150
        assert summary.tax_amount == 0
        assert summary.total == 0

    def test_same_inputs_same_summary(self) -> None:
        services = _services(120, 80)
        assert summarize_quote(services, _config()) == summarize_quote(services, _config())


class TestRounding:
    def test_round_half_up(self) -> None:
        assert round_half_up(10.8) == 11
        assert round_half_up(10.5) == 11
        assert round_half_up(11.5) == 12
        assert round_half_up(10.49) == 10

    def test_just_below_half_rounds_down(self) -> None:
        assert round_half_up(0.49999999999999994) == 0

    def test_negative_halves_go_up(self) -> None:
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3

    def test_clamp_percent(self) -> None:
        assert clamp_percent(-1) == 0.0
        assert clamp_percent(101) == 100.0
        assert clamp_percent(8.25) == 8.25
