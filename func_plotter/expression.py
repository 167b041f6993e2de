"""
Expression normalisation, validation and evaluation.

Grammar (lowest to highest binding)::

    additive       := multiplicative (("+" | "-") multiplicative)*
    multiplicative := power (("*" | "/") power)*
    power          := factor ("**" multiplicative)?
    factor         := "-" power | "(" additive ")" | "x" | number

The exponent of ``**`` re-enters the multiplicative level, so powers are
right-associative and an exponent swallows the products that follow it:
``2^3^2`` is 512 and ``2^3*4`` is ``2^12``.  A unary minus negates the
power-bound factor behind it, so ``-5^2`` is -25.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

import numpy as np

from func_plotter.numeric import parse_float

logger = logging.getLogger(__name__)

CurveFunction = Callable[[float], float]

POWER_TOKEN: str = "**"

_OPERATORS: frozenset[str] = frozenset("+-*/^")
_OPERAND_END: frozenset[str] = frozenset("0123456789x)")
_OPERAND_START: frozenset[str] = frozenset("0123456789x(")
_POWER_LEFT: frozenset[str] = _OPERAND_END
_DIGITS: frozenset[str] = frozenset("0123456789")
_NUMBER_CHARS: frozenset[str] = frozenset("0123456789.")

_ALLOWED_RE = re.compile(r"[0-9x+\-*/().]+")
_ASSIGNMENT_RE = re.compile(r"y\s*=\s*")
_WHITESPACE_RE = re.compile(r"\s+")
_GLYPHS: dict[str, str] = {"×": "*", "÷": "/"}


# ===========================================================================
# Errors
# ===========================================================================

class ExpressionError(ValueError):
    """Base class for everything that can go wrong with an expression."""


class InvalidExpressionError(ExpressionError):
    """The text is not an expression this plotter accepts."""

    def __init__(self, message: str = "Invalid expression") -> None:
        super().__init__(message)


class EvaluationError(ExpressionError):
    """A syntactically accepted expression could not be evaluated."""


# ===========================================================================
# Normalisation and validation
# ===========================================================================

def normalize(text: str) -> str:
    expr = _ASSIGNMENT_RE.sub("", text.lower(), count=1)
    expr = _WHITESPACE_RE.sub("", expr)
    expr = expr.replace("^", POWER_TOKEN)
    for glyph, ascii_op in _GLYPHS.items():
        expr = expr.replace(glyph, ascii_op)
    return expr


def _has_only_allowed_chars(expr: str) -> bool:
    return _ALLOWED_RE.fullmatch(expr.replace(POWER_TOKEN, "")) is not None


def _has_power_operands(expr: str) -> bool:
    for i in range(len(expr) - 1):
        if expr[i] == "*" and expr[i + 1] == "*":
            if i == 0 or expr[i - 1] not in _POWER_LEFT:
                return False
    return True


def _is_balanced(expr: str) -> bool:
    return expr.count("(") - expr.count(")") == 0


def _has_no_double_operators(expr: str) -> bool:
    i = 0
    while i < len(expr) - 1:
        current, nxt = expr[i], expr[i + 1]
        if current in _OPERATORS and nxt in _OPERATORS:
            if current == "*" and nxt == "*":
                i += 2
                continue
            if current == "-" and nxt == "-":
                unary = i == 0 or expr[i - 1] in _OPERATORS or expr[i - 1] == "("
                if unary:
                    i += 1
                    continue
            return False
        i += 1
    return True


def _has_no_missing_operator(expr: str) -> bool:
    for current, nxt in zip(expr, expr[1:]):
        if current in _OPERAND_END and nxt in _OPERAND_START:
            if not (current in _DIGITS and nxt in _DIGITS):
                return False
    return True


def is_valid_expression(expr: str) -> bool:
    """Check a normalised expression before any evaluation is attempted.

    The checks are independent passes; the ``--`` allowance and the
    missing-operator rule are deliberately not merged.
    """
    if not _has_only_allowed_chars(expr):
        return False
    if len(expr) == 1 and expr in _OPERATORS:
        return False
    if expr.startswith("+"):
        return False
    if not _has_power_operands(expr):
        return False
    if not _is_balanced(expr):
        return False
    if not _has_no_double_operators(expr):
        return False
    return _has_no_missing_operator(expr)


# ===========================================================================
# Evaluation
# ===========================================================================

class _Parser:
    """Single-use recursive-descent evaluator with an explicit cursor."""

    __slots__ = ("_expr", "_x", "_pos")

    def __init__(self, expr: str, x: float) -> None:
        self._expr = expr
        self._x = x
        self._pos = 0

    def run(self) -> float:
        result = self._additive()
        if self._pos != len(self._expr):
            raise EvaluationError(f"Unexpected character: {self._expr[self._pos]}")
        return result

    def _peek(self) -> str:
        return self._expr[self._pos] if self._pos < len(self._expr) else ""

    def _at_power(self) -> bool:
        return self._expr.startswith(POWER_TOKEN, self._pos)

    def _additive(self) -> float:
        left = self._multiplicative()
        while self._peek() in ("+", "-"):
            sign = self._peek()
            self._pos += 1
            right = self._multiplicative()
            left = left + right if sign == "+" else left - right
        return left

    def _multiplicative(self) -> float:
        left = self._power()
        while self._peek() in ("*", "/"):
            op = self._peek()
            self._pos += 1
            right = self._power()
            if op == "*":
                left = left * right
            else:
                if right == 0:
                    raise EvaluationError("Division by zero")
                left = left / right
        return left

    def _power(self) -> float:
        base = self._factor()
        if self._at_power():
            self._pos += len(POWER_TOKEN)
            exponent = self._multiplicative()
            with np.errstate(all="ignore"):
                return float(np.power(np.float64(base), np.float64(exponent)))
        return base

    def _factor(self) -> float:
        if self._pos >= len(self._expr):
            raise EvaluationError("Unexpected end of expression")

        ch = self._peek()
        if ch == "-":
            self._pos += 1
            return -self._power()

        if ch == "(":
            self._pos += 1
            result = self._additive()
            if self._peek() != ")":
                raise EvaluationError("Expected closing parenthesis")
            self._pos += 1
            return result

        if ch == "x":
            self._pos += 1
            return self._x

        return self._number()

    def _number(self) -> float:
        start = self._pos
        while self._peek() in _NUMBER_CHARS:
            self._pos += 1
        literal = self._expr[start:self._pos]
        if not literal:
            raise EvaluationError("Expected a number or variable")
        value = parse_float(literal)
        if value != value:
            raise EvaluationError(f"Invalid number: {literal}")
        return value


def evaluate_expression(expr: str, x: float) -> float:
    """Evaluate a normalised expression at *x*.

    Float arithmetic follows IEEE semantics: overflow gives +/-inf and a
    negative base with a fractional exponent gives NaN.  Division by zero,
    malformed text and nesting deeper than the interpreter's recursion limit
    raise :class:`EvaluationError`.
    """
    try:
        return _Parser(expr, float(x)).run()
    except RecursionError as exc:
        raise EvaluationError("Expression nested too deeply") from exc


def compile_function(text: str) -> CurveFunction:
    """Normalise and validate *text*, returning a reusable curve function.

    Raises :class:`InvalidExpressionError` if the text is rejected.  The
    returned callable raises :class:`EvaluationError` naming the input value
    it failed on.
    """
    if not text or not text.strip():
        raise InvalidExpressionError("Enter a function")

    expr = normalize(text.strip())
    if not is_valid_expression(expr):
        logger.warning("Rejected expression %r (normalised %r)", text, expr)
        raise InvalidExpressionError()

    def evaluate(x: float) -> float:
        try:
            return evaluate_expression(expr, x)
        except EvaluationError as exc:
            raise EvaluationError(f"evaluation failed at x={x}: {exc}") from exc

    return evaluate
