"""
Deterministic numeric helpers.

Decimal parsing and rounding are done by hand instead of via the builtins
so that axis bounds, tick positions and point labels come out the same on
every platform:

    parse_float("-2.75")   -> -2.75
    floor(-2.5)            -> -3
    round_half_away(-2.5)  -> -3     (ties go away from zero)
"""

from __future__ import annotations

import math
import re
from typing import Union

Number = Union[int, float, str]

PI: float = 3.141592653589793

_INT_RE = re.compile(r"[+-]?\d*")
_FRAC_RE = re.compile(r"\d*")


def is_not_nan_or_inf(x: float) -> bool:
    """True iff *x* is neither NaN nor +/-inf."""
    return x == x and x * 0 == 0


def absolute(x: float) -> float:
    return -x if x < 0 else x


def parse_float(value: Number) -> float:
    if not isinstance(value, str):
        return float(value)

    text = value.strip()
    parts = text.split(".")
    if len(parts) > 2 or text in ("", ".", "+", "-", "+.", "-."):
        return float("nan")

    int_text = parts[0]
    if not _INT_RE.fullmatch(int_text):
        return float("nan")
    digits = int_text.lstrip("+-")
    int_part = float(digits) if digits else 0.0
    negative = int_text.startswith("-")
    if negative:
        int_part = -int_part

    if len(parts) == 1:
        return int_part

    frac_text = parts[1]
    if not _FRAC_RE.fullmatch(frac_text):
        return float("nan")
    frac_part = float("0." + frac_text) if frac_text else 0.0

    return int_part - frac_part if negative else int_part + frac_part


def parse_int(value: Number) -> float:
    """Truncate toward zero."""
    n = parse_float(value)
    if not is_not_nan_or_inf(n):
        return float("nan")
    return n - math.fmod(n, 1.0)


def floor(value: Number) -> float:
    n = parse_float(value)
    int_part = parse_int(n)
    return int_part - 1 if n < 0 and int_part != n else int_part


def ceil(value: Number) -> float:
    n = parse_float(value)
    int_part = parse_int(n)
    return int_part + 1 if n > 0 and int_part != n else int_part


def round_half_away(value: Number) -> float:
    n = parse_float(value)
    int_part = parse_int(n)
    if absolute(n - int_part) >= 0.5:
        return int_part + 1 if n > 0 else int_part - 1
    return int_part


def round2(value: float) -> float:
    """Round to two decimals, the precision used for point labels."""
    return round_half_away(value * 100) / 100


def format_number(value: float) -> str:
    """Integers without a trailing ``.0``, everything else as ``repr``."""
    return str(int(value)) if value == int(value) else repr(value)
