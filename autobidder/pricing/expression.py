"""Sandboxed evaluation of calculator formula expressions.

Formula text is written by business owners, so it is never handed to
Python's ``eval``. Instead the evaluator:

1. **Substitutes** each variable id with its resolved number. Matching is
   whole-word only (``sqft`` never matches inside ``sqftPrice``) and runs
   in one pass, so a substituted number is never matched again.
2. **Parses** the substituted text with a small recursive-descent parser
   over an arithmetic-only grammar::

       conditional := or ("?" conditional ":" conditional)?
       or          := and ("||" and)*
       and         := equality ("&&" equality)*
       equality    := comparison (("==" | "===" | "!=" | "!==") comparison)*
       comparison  := additive (("<" | "<=" | ">" | ">=") additive)*
       additive    := term (("+" | "-") term)*
       term        := unary (("*" | "/") unary)*
       unary       := ("-" | "+" | "!") unary | primary
       primary     := NUMBER | "(" conditional ")"

3. **Evaluates** the tree. Ternaries and ``&&``/``||`` short-circuit, and
   any nonzero value is true.

Anything that cannot produce a finite number raises a subclass of
:class:`~autobidder.exceptions.EvaluationError`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

from autobidder.exceptions import (
    ExpressionTooComplexError,
    FormulaSyntaxError,
    NonFiniteResultError,
    UnresolvedIdentifierError,
)
from autobidder.pricing.rounding import round_half_up

_TOKEN_RE = re.compile(
    r"""
    (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)   # 12, 1.5, .5, 2e3
    |(?P<name>[A-Za-z_][A-Za-z0-9_]*)                  # leftover identifier
    |(?P<op>===|!==|==|!=|<=|>=|&&|\|\||[-+*/()?:<>!])
    """,
    re.VERBOSE,
)

_WHITESPACE_RE = re.compile(r"\s+")

# An identifier not glued to a preceding word character, digit, or dot,
# so the exponent in "1e5" is not read as an identifier.
_IDENTIFIER_RE = re.compile(r"(?<![A-Za-z0-9_.])[A-Za-z_][A-Za-z0-9_]*")

_EQUALITY_OPS = frozenset({"==", "===", "!=", "!=="})
_COMPARISON_OPS = frozenset({"<", "<=", ">", ">="})
_ADDITIVE_OPS = frozenset({"+", "-"})
_MULTIPLICATIVE_OPS = frozenset({"*", "/"})
_UNARY_OPS = frozenset({"-", "+", "!"})

# Binary operator sets from loosest to tightest binding
_BINARY_LEVELS: tuple[frozenset[str], ...] = (
    frozenset({"||"}),
    frozenset({"&&"}),
    _EQUALITY_OPS,
    _COMPARISON_OPS,
    _ADDITIVE_OPS,
    _MULTIPLICATIVE_OPS,
)


@dataclass(frozen=True)
class EvaluatorLimits:
    """Upper bounds on the work a single expression may demand."""

    max_length: int = 2000
    max_depth: int = 32


DEFAULT_LIMITS = EvaluatorLimits()


# ---------------------------------------------------------------------------
# Syntax tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    position: int


@dataclass(frozen=True)
class _Number:
    value: float


@dataclass(frozen=True)
class _Unary:
    op: str
    operand: _Node


@dataclass(frozen=True)
class _Chain:
    """A left-associative run of same-precedence operators, kept flat."""

    first: _Node
    rest: tuple[tuple[str, _Node], ...]


@dataclass(frozen=True)
class _Conditional:
    test: _Node
    if_true: _Node
    if_false: _Node


_Node = _Number | _Unary | _Chain | _Conditional


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


def _format_number(value: float) -> str:
    if not math.isfinite(value):
        msg = f"Variable value {value} is not a finite number"
        raise NonFiniteResultError(msg)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def substitute_identifiers(expression: str, values: Mapping[str, float]) -> str:
    """Replace each whole-word occurrence of an id in ``values`` with its number."""
    if not values:
        return expression
    names = sorted(values, key=len, reverse=True)
    pattern = re.compile(
        r"(?<![A-Za-z0-9_])(" + "|".join(re.escape(n) for n in names) + r")(?![A-Za-z0-9_])"
    )
    return pattern.sub(lambda m: _format_number(float(values[m.group(1)])), expression)


def referenced_identifiers(expression: str) -> set[str]:
    """Return the identifiers that appear as whole words in ``expression``."""
    return set(_IDENTIFIER_RE.findall(expression))


# ---------------------------------------------------------------------------
# Tokenizer and parser
# ---------------------------------------------------------------------------


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        ws = _WHITESPACE_RE.match(text, pos)
        if ws:
            pos = ws.end()
            continue
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            msg = f"Unexpected character {text[pos]!r} at position {pos}"
            raise FormulaSyntaxError(msg)
        kind = match.lastgroup or "op"
        if kind == "name":
            raise UnresolvedIdentifierError(match.group())
        tokens.append(_Token(kind=kind, text=match.group(), position=pos))
        pos = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser producing a syntax tree from tokens."""

    def __init__(self, tokens: list[_Token], max_depth: int) -> None:
        self._tokens = tokens
        self._index = 0
        self._depth = 0
        self._max_depth = max_depth

    def parse(self) -> _Node:
        if not self._tokens:
            msg = "Formula is empty"
            raise FormulaSyntaxError(msg)
        node = self._conditional()
        token = self._peek()
        if token is not None:
            msg = f"Unexpected '{token.text}' at position {token.position}"
            raise FormulaSyntaxError(msg)
        return node

    # -- helpers -----------------------------------------------------------

    def _peek(self) -> _Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _accept(self, ops: frozenset[str]) -> str | None:
        token = self._peek()
        if token is not None and token.kind == "op" and token.text in ops:
            self._index += 1
            return token.text
        return None

    def _expect(self, op: str) -> None:
        token = self._peek()
        if token is None:
            msg = f"Expected '{op}' but the formula ended"
            raise FormulaSyntaxError(msg)
        if token.kind != "op" or token.text != op:
            msg = f"Expected '{op}' at position {token.position}, found '{token.text}'"
            raise FormulaSyntaxError(msg)
        self._index += 1

    def _descend(self) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            msg = f"Formula nesting exceeds the limit of {self._max_depth}"
            raise ExpressionTooComplexError(msg)

    # -- grammar -----------------------------------------------------------

    def _conditional(self) -> _Node:
        self._descend()
        try:
            test = self._binary(0)
            if self._accept(frozenset({"?"})) is None:
                return test
            if_true = self._conditional()
            self._expect(":")
            if_false = self._conditional()
            return _Conditional(test=test, if_true=if_true, if_false=if_false)
        finally:
            self._depth -= 1

    def _binary(self, level: int) -> _Node:
        if level == len(_BINARY_LEVELS):
            return self._unary()
        ops = _BINARY_LEVELS[level]
        first = self._binary(level + 1)
        rest: list[tuple[str, _Node]] = []
        op = self._accept(ops)
        while op is not None:
            rest.append((op, self._binary(level + 1)))
            op = self._accept(ops)
        if not rest:
            return first
        return _Chain(first=first, rest=tuple(rest))

    def _unary(self) -> _Node:
        op = self._accept(_UNARY_OPS)
        if op is None:
            return self._primary()
        self._descend()
        try:
            return _Unary(op=op, operand=self._unary())
        finally:
            self._depth -= 1

    def _primary(self) -> _Node:
        token = self._peek()
        if token is None:
            msg = "Formula ended where a number was expected"
            raise FormulaSyntaxError(msg)
        if token.kind == "number":
            self._index += 1
            value = float(token.text)
            if not math.isfinite(value):
                msg = f"Number '{token.text}' at position {token.position} is too large"
                raise NonFiniteResultError(msg)
            return _Number(value=value)
        if token.text == "(":
            self._index += 1
            node = self._conditional()
            self._expect(")")
            return node
        msg = f"Unexpected '{token.text}' at position {token.position}"
        raise FormulaSyntaxError(msg)


def parse_expression(text: str, limits: EvaluatorLimits = DEFAULT_LIMITS) -> _Node:
    """Parse fully substituted expression text into a syntax tree."""
    if len(text) > limits.max_length:
        msg = f"Formula is longer than {limits.max_length} characters"
        raise ExpressionTooComplexError(msg)
    try:
        return _Parser(_tokenize(text), limits.max_depth).parse()
    except RecursionError as exc:
        msg = "Formula nesting exceeds what the evaluator can parse"
        raise ExpressionTooComplexError(msg) from exc


def check_syntax(text: str, limits: EvaluatorLimits = DEFAULT_LIMITS) -> None:
    """Raise an EvaluationError if ``text`` does not parse; evaluate nothing."""
    parse_expression(text, limits)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def _truthy(value: float) -> bool:
    return value != 0 and not math.isnan(value)


def _apply(op: str, left: float, right: float) -> float:
    result = _apply_unchecked(op, left, right)
    # Overflow must fail here, before a comparison or test can consume it
    if not math.isfinite(result):
        msg = f"Formula produced a non-finite intermediate result ({result})"
        raise NonFiniteResultError(msg)
    return result


def _apply_unchecked(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        if right == 0:
            msg = "Division by zero"
            raise NonFiniteResultError(msg)
        return left / right
    if op == "<":
        return float(left < right)
    if op == "<=":
        return float(left <= right)
    if op == ">":
        return float(left > right)
    if op == ">=":
        return float(left >= right)
    if op in ("==", "==="):
        return float(left == right)
    if op in ("!=", "!=="):
        return float(left != right)
    msg = f"Unsupported operator '{op}'"
    raise FormulaSyntaxError(msg)


def _evaluate(node: _Node) -> float:
    if isinstance(node, _Number):
        return node.value
    if isinstance(node, _Unary):
        value = _evaluate(node.operand)
        if node.op == "-":
            return -value
        if node.op == "!":
            return 0.0 if _truthy(value) else 1.0
        return value
    if isinstance(node, _Conditional):
        branch = node.if_true if _truthy(_evaluate(node.test)) else node.if_false
        return _evaluate(branch)

    # Logical operators return the deciding operand, not a bare boolean
    acc = _evaluate(node.first)
    for op, operand in node.rest:
        if op == "&&":
            if _truthy(acc):
                acc = _evaluate(operand)
        elif op == "||":
            if not _truthy(acc):
                acc = _evaluate(operand)
        else:
            acc = _apply(op, acc, _evaluate(operand))
    return acc


def evaluate_expression(text: str, limits: EvaluatorLimits = DEFAULT_LIMITS) -> float:
    """Evaluate fully substituted expression text to a finite float.

    Raises:
        FormulaSyntaxError: If the text is not a valid expression.
        UnresolvedIdentifierError: If an identifier remains in the text.
        NonFiniteResultError: On division by zero or an infinite/NaN result.
        ExpressionTooComplexError: If the text exceeds ``limits``.
    """
    tree = parse_expression(text, limits)
    try:
        result = _evaluate(tree)
    except RecursionError as exc:
        msg = "Formula nesting exceeds what the evaluator can handle"
        raise ExpressionTooComplexError(msg) from exc
    if not math.isfinite(result):
        msg = f"Formula produced a non-finite result ({result})"
        raise NonFiniteResultError(msg)
    return result


def evaluate_formula(
    expression: str,
    values: Mapping[str, float],
    limits: EvaluatorLimits = DEFAULT_LIMITS,
) -> int:
    """Compute a price from a formula expression and resolved variable values.

    ``values`` should hold an entry for every variable of the owning
    formula. The result is clamped to be non-negative and rounded half-up
    to a whole currency unit.

    Raises:
        EvaluationError: If no price can be produced. A failure is never
            reported as 0.
    """
    if len(expression) > limits.max_length:
        msg = f"Formula is longer than {limits.max_length} characters"
        raise ExpressionTooComplexError(msg)
    result = evaluate_expression(substitute_identifiers(expression, values), limits)
    return round_half_up(max(result, 0.0))
