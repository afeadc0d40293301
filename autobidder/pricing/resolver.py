"""Variable resolution: turn a customer's raw answer into a number.

Every variable type maps to exactly one numeric contribution that the
expression evaluator substitutes in place of the variable id:

- ``number`` / ``slider``: the answer coerced to a number.
- ``checkbox``: 1 when checked, 0 otherwise.
- ``select`` / ``dropdown``: the chosen option's ``numeric_value`` (legacy
  ``select`` variables fall back to the option's ``multiplier``).
- ``multiple-choice``: the sum of the chosen options' ``numeric_value``.
- ``text``: always 0, text answers are informational.

Resolution never raises. Anything malformed degrades to 0 so the
evaluator always receives a complete set of numbers; degradations are
logged at DEBUG level.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from autobidder.models.enums import VariableType
from autobidder.pricing.conditions import is_variable_visible

if TYPE_CHECKING:
    from autobidder.models.formula import Formula, Variable, VariableOption

logger = logging.getLogger(__name__)


def coerce_number(raw: Any) -> float:
    """Coerce a raw answer to a finite float, or 0.0 when that is impossible."""
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            logger.debug("Answer %d is too large, using 0", raw)
            return 0.0
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return 0.0
        try:
            value = float(text)
        except ValueError:
            logger.debug("Answer %r is not a number, using 0", raw)
            return 0.0
    else:
        logger.debug("Answer of type %s is not a number, using 0", type(raw).__name__)
        return 0.0
    if not math.isfinite(value):
        logger.debug("Answer %r is not finite, using 0", raw)
        return 0.0
    return value


def _find_option(variable: Variable, raw: Any) -> VariableOption | None:
    for option in variable.options:
        if option.value == raw:
            return option
    # HTML forms post strings; "2" should still select an option valued 2
    text = str(raw)
    for option in variable.options:
        if str(option.value) == text:
            return option
    return None


def _resolve_single_choice(variable: Variable, raw: Any) -> float:
    if isinstance(raw, (list, tuple)):
        # Legacy records stored single selections as one-element arrays
        raw = raw[0] if raw else None
    if raw is None:
        return 0.0
    option = _find_option(variable, raw)
    if option is None:
        logger.debug("No option of variable '%s' matches %r", variable.id, raw)
        return 0.0
    if option.numeric_value is not None:
        return option.numeric_value
    if variable.type == VariableType.SELECT and option.multiplier is not None:
        return option.multiplier
    return 0.0


def _resolve_multiple_choice(variable: Variable, raw: Any) -> float:
    if not isinstance(raw, (list, tuple)):
        if raw is not None:
            logger.debug(
                "Multiple-choice variable '%s' expected a list, got %r", variable.id, raw
            )
        return 0.0
    total = 0.0
    for selected in raw:
        option = _find_option(variable, selected)
        if option is not None and option.numeric_value is not None:
            total += option.numeric_value
    return total


def _resolve_option_reference(option: VariableOption, raw: Any) -> float:
    if not isinstance(raw, (list, tuple)):
        return 0.0
    if not any(str(value) == str(option.value) for value in raw):
        return 0.0
    return option.numeric_value or 0.0


def resolve_variable(variable: Variable, raw: Any) -> float:
    """Resolve one raw answer to the number substituted for ``variable.id``."""
    kind = variable.type
    if kind in (VariableType.NUMBER, VariableType.SLIDER):
        return coerce_number(raw)
    if kind == VariableType.CHECKBOX:
        return 1.0 if raw else 0.0
    if kind in (VariableType.SELECT, VariableType.DROPDOWN):
        return _resolve_single_choice(variable, raw)
    if kind == VariableType.MULTIPLE_CHOICE:
        return _resolve_multiple_choice(variable, raw)
    return 0.0


def resolve_answers(formula: Formula, answers: Mapping[str, Any]) -> dict[str, float]:
    """Resolve every variable of ``formula`` against the customer's answers.

    Unanswered variables use their ``default_value``. Variables hidden by
    conditional logic resolve to 0 regardless of any answer or default.
    The result has an entry for every variable of the formula, plus one
    per option reference of multi-select variables (the option's
    ``numeric_value`` when selected, else 0).
    """
    effective: dict[str, Any] = {}
    for variable in formula.variables:
        raw = answers.get(variable.id)
        effective[variable.id] = variable.default_value if raw is None else raw

    resolved: dict[str, float] = {}
    for variable in formula.variables:
        references = variable.option_references()
        if not is_variable_visible(variable, effective):
            resolved[variable.id] = 0.0
            resolved.update(dict.fromkeys(references, 0.0))
            continue
        raw = effective[variable.id]
        resolved[variable.id] = resolve_variable(variable, raw)
        for token, option in references.items():
            resolved[token] = _resolve_option_reference(option, raw)
    return resolved
