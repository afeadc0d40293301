"""Conditional visibility of calculator variables.

A variable can be configured to appear only when an earlier variable's
answer satisfies a condition. Hidden variables never contribute to a price.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from autobidder.models.enums import ConditionOperator

if TYPE_CHECKING:
    from autobidder.models.formula import Variable


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_empty(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return value is None or value == "" or value is False or value == 0


def is_variable_visible(variable: Variable, answers: Mapping[str, Any]) -> bool:
    """Return whether ``variable`` is shown given the current answers.

    A variable with no enabled rule is always visible. When the variable it
    depends on has no answer yet, the variable is hidden. Unknown operators
    leave the variable visible.
    """
    logic = variable.conditional_logic
    if logic is None or not logic.enabled or not logic.depends_on_variable:
        return True

    actual = answers.get(logic.depends_on_variable)
    if actual is None:
        return False

    expected = logic.expected_value
    condition = logic.condition
    if condition == ConditionOperator.EQUALS:
        return actual == expected
    if condition == ConditionOperator.NOT_EQUALS:
        return actual != expected
    if condition == ConditionOperator.GREATER_THAN:
        return _is_number(actual) and _is_number(expected) and actual > expected
    if condition == ConditionOperator.LESS_THAN:
        return _is_number(actual) and _is_number(expected) and actual < expected
    if condition == ConditionOperator.CONTAINS:
        if logic.expected_values is not None:
            return actual in logic.expected_values
        return (
            isinstance(actual, str)
            and isinstance(expected, str)
            and expected.lower() in actual.lower()
        )
    if condition == ConditionOperator.IS_EMPTY:
        return _is_empty(actual)
    if condition == ConditionOperator.IS_NOT_EMPTY:
        return not _is_empty(actual)
    return True
