"""Enums for the Autobidder domain models."""

from enum import StrEnum


class VariableType(StrEnum):
    """Input types a calculator variable can have."""

    NUMBER = "number"
    TEXT = "text"
    CHECKBOX = "checkbox"
    SELECT = "select"
    DROPDOWN = "dropdown"
    MULTIPLE_CHOICE = "multiple-choice"
    SLIDER = "slider"


class ConditionOperator(StrEnum):
    """Comparisons available to conditional visibility rules."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
