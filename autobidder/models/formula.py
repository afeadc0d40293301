"""Calculator definition models: formulas and their variables."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, model_validator

from autobidder.models.enums import ConditionOperator, VariableType

IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

_CHOICE_TYPES = frozenset(
    {VariableType.SELECT, VariableType.DROPDOWN, VariableType.MULTIPLE_CHOICE}
)


class VariableOption(BaseModel):
    """One choice on a select, dropdown, or multiple-choice variable."""

    id: str | None = None
    label: str
    value: str | int | float
    numeric_value: float | None = None
    multiplier: float | None = None  # legacy select pricing
    image: str | None = None


class ConditionalLogic(BaseModel):
    """Rule that shows a variable only when another variable's answer matches."""

    enabled: bool = False
    depends_on_variable: str | None = None
    condition: ConditionOperator = ConditionOperator.EQUALS
    expected_value: str | int | float | bool | None = None
    expected_values: list[str | int | float | bool] | None = None


class Variable(BaseModel):
    """A single configurable input on a calculator.

    The ``id`` is the token the formula expression refers to. A variable
    whose id never appears in the expression is legal but has no effect
    on the price.
    """

    id: str = Field(pattern=IDENTIFIER_PATTERN)
    name: str
    type: VariableType
    options: list[VariableOption] = Field(default_factory=list)
    default_value: Any = None
    unit: str | None = None
    conditional_logic: ConditionalLogic | None = None
    allow_multiple_selection: bool = False

    @property
    def is_choice(self) -> bool:
        return self.type in _CHOICE_TYPES

    def option_references(self) -> dict[str, VariableOption]:
        """Map per-option formula tokens to their options.

        A multiple-choice variable that allows multiple selection exposes
        each option with an ``id`` as ``<variable id>_<option id>``, so a
        formula can price the options separately.
        """
        if self.type != VariableType.MULTIPLE_CHOICE or not self.allow_multiple_selection:
            return {}
        references: dict[str, VariableOption] = {}
        for option in self.options:
            if option.id is None:
                continue
            token = f"{self.id}_{option.id}"
            if re.fullmatch(IDENTIFIER_PATTERN, token):
                references[token] = option
        return references


class Formula(BaseModel):
    """A business owner's calculator: ordered variables plus one expression.

    Variable order is display order only. Formulas are versionless; edits
    replace the stored record.
    """

    id: int
    name: str
    title: str | None = None
    variables: list[Variable] = Field(default_factory=list)
    formula: str
    embed_id: str | None = None
    is_active: bool = True
    icon: str | None = None

    @model_validator(mode="after")
    def variable_ids_unique(self) -> Formula:
        seen: set[str] = set()
        for variable in self.variables:
            if variable.id in seen:
                msg = f"Duplicate variable id '{variable.id}' in formula '{self.name}'"
                raise ValueError(msg)
            seen.add(variable.id)
        for variable in self.variables:
            for token in variable.option_references():
                if token in seen:
                    msg = (
                        f"Option reference '{token}' clashes with another id"
                        f" in formula '{self.name}'"
                    )
                    raise ValueError(msg)
                seen.add(token)
        return self

    def get_variable(self, variable_id: str) -> Variable | None:
        for variable in self.variables:
            if variable.id == variable_id:
                return variable
        return None

    @property
    def variable_ids(self) -> list[str]:
        return [v.id for v in self.variables]

    @property
    def value_ids(self) -> list[str]:
        """Every token a resolved value is substituted for: variable ids plus option references."""
        ids = self.variable_ids
        for variable in self.variables:
            ids.extend(variable.option_references())
        return ids
