"""Read-only formula store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from autobidder.exceptions import FormulaNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from autobidder.models.formula import Formula


class FormulaRepository:
    """Repository for looking up calculator formulas.

    Wraps an in-memory collection of formulas keyed by id and embed id.
    Formulas are read-only here; editing happens in the builder.
    """

    def __init__(self, formulas: Iterable[Formula]) -> None:
        self._by_id: dict[int, Formula] = {}
        self._by_embed_id: dict[str, Formula] = {}
        for formula in formulas:
            if formula.id in self._by_id:
                msg = f"Duplicate formula id {formula.id}"
                raise ValueError(msg)
            self._by_id[formula.id] = formula
            if formula.embed_id:
                self._by_embed_id[formula.embed_id] = formula

    def get(self, formula_id: int) -> Formula | None:
        """Return the formula with ``formula_id``, or None."""
        return self._by_id.get(formula_id)

    def require(self, formula_id: int) -> Formula:
        """Return the formula with ``formula_id``.

        Raises:
            FormulaNotFoundError: If there is no such formula.
        """
        formula = self._by_id.get(formula_id)
        if formula is None:
            msg = f"Formula {formula_id} not found"
            raise FormulaNotFoundError(msg)
        return formula

    def get_by_embed_id(self, embed_id: str) -> Formula | None:
        return self._by_embed_id.get(embed_id)

    def list_active(self) -> list[Formula]:
        """Return active formulas ordered by id."""
        return [f for _, f in sorted(self._by_id.items()) if f.is_active]

    def __len__(self) -> int:
        return len(self._by_id)
