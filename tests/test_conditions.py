"""Tests for conditional visibility of variables."""

from __future__ import annotations

from typing import Any

from autobidder.models.enums import ConditionOperator, VariableType
from autobidder.models.formula import ConditionalLogic, Variable
from autobidder.pricing.conditions import is_variable_visible


def _dependent(
    condition: ConditionOperator,
    expected_value: Any = None,
    expected_values: list[Any] | None = None,
    enabled: bool = True,
) -> Variable:
    return Variable(
        id="dependent",
        name="Dependent",
        type=VariableType.NUMBER,
        conditional_logic=ConditionalLogic(
            enabled=enabled,
            depends_on_variable="parent",
            condition=condition,
            expected_value=expected_value,
            expected_values=expected_values,
        ),
    )


class TestAlwaysVisible:
    def test_no_logic(self) -> None:
        var = Variable(id="plain", name="Plain", type=VariableType.NUMBER)
        assert is_variable_visible(var, {}) is True

    def test_disabled_logic(self) -> None:
        var = _dependent(ConditionOperator.EQUALS, "x", enabled=False)
        assert is_variable_visible(var, {}) is True

    def test_logic_without_dependency(self) -> None:
        var = Variable(
            id="v",
            name="V",
            type=VariableType.NUMBER,
            conditional_logic=ConditionalLogic(enabled=True),
        )
        assert is_variable_visible(var, {}) is True


class TestConditions:
    def test_hidden_until_parent_answered(self) -> None:
        var = _dependent(ConditionOperator.IS_EMPTY)
        assert is_variable_visible(var, {}) is False

    def test_equals(self) -> None:
        var = _dependent(ConditionOperator.EQUALS, "premium")
        assert is_variable_visible(var, {"parent": "premium"}) is True
        assert is_variable_visible(var, {"parent": "basic"}) is False

    def test_not_equals(self) -> None:
        var = _dependent(ConditionOperator.NOT_EQUALS, "premium")
        assert is_variable_visible(var, {"parent": "basic"}) is True

    def test_greater_than(self) -> None:
        var = _dependent(ConditionOperator.GREATER_THAN, 1000)
        assert is_variable_visible(var, {"parent": 1500}) is True
        assert is_variable_visible(var, {"parent": 500}) is False

    def test_greater_than_requires_numbers(self) -> None:
        var = _dependent(ConditionOperator.GREATER_THAN, 1000)
        assert is_variable_visible(var, {"parent": "1500"}) is False

    def test_less_than(self) -> None:
        var = _dependent(ConditionOperator.LESS_THAN, 10)
        assert is_variable_visible(var, {"parent": 3}) is True

    def test_contains_expected_values(self) -> None:
        var = _dependent(ConditionOperator.CONTAINS, expected_values=["tile", "slate"])
        assert is_variable_visible(var, {"parent": "slate"}) is True
        assert is_variable_visible(var, {"parent": "metal"}) is False

    def test_contains_substring_case_insensitive(self) -> None:
        var = _dependent(ConditionOperator.CONTAINS, "roof")
        assert is_variable_visible(var, {"parent": "Metal Roof"}) is True

    def test_is_empty(self) -> None:
        var = _dependent(ConditionOperator.IS_EMPTY)
        assert is_variable_visible(var, {"parent": ""}) is True
        assert is_variable_visible(var, {"parent": []}) is True
        assert is_variable_visible(var, {"parent": "x"}) is False

    def test_is_not_empty(self) -> None:
        var = _dependent(ConditionOperator.IS_NOT_EMPTY)
        assert is_variable_visible(var, {"parent": ["a"]}) is True
        assert is_variable_visible(var, {"parent": ""}) is False
