import math

import pytest

from func_plotter.numeric import (
    absolute,
    ceil,
    floor,
    format_number,
    is_not_nan_or_inf,
    parse_float,
    parse_int,
    round2,
    round_half_away,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3.25", 3.25),
        ("-2.75", -2.75),
        ("-0.5", -0.5),
        ("42", 42.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("+7", 7.0),
    ],
)
def test_parse_float_well_formed(text, expected):
    assert parse_float(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", ".", "-", "1.2.3", "1e5", "abc", "1,5", "0x10"])
def test_parse_float_malformed_is_nan(text):
    assert math.isnan(parse_float(text))


def test_parse_float_passes_numbers_through():
    assert parse_float(4) == 4.0
    assert parse_float(-1.5) == -1.5


def test_parse_int_truncates_toward_zero():
    assert parse_int(2.7) == 2
    assert parse_int(-2.7) == -2
    assert parse_int("9.99") == 9
    assert math.isnan(parse_int(float("inf")))


def test_floor_and_ceil_sign_handling():
    assert floor(-2.5) == -3
    assert floor(2.5) == 2
    assert floor(-3) == -3
    assert floor("3.7") == 3
    assert ceil(2.1) == 3
    assert ceil(-2.1) == -2
    assert ceil(4) == 4


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (-2.5, -3), (2.4, 2), (-2.4, -2), (0.5, 1), (-0.5, -1), (7, 7)],
)
def test_round_half_away_from_zero(value, expected):
    assert round_half_away(value) == expected


def test_round2():
    assert round2(1.234) == pytest.approx(1.23)
    assert round2(-4.0) == -4.0
    assert round2(0.125) == pytest.approx(0.13)


def test_absolute():
    assert absolute(-3.5) == 3.5
    assert absolute(2) == 2


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, True),
        (-1e308, True),
        (float("nan"), False),
        (float("inf"), False),
        (float("-inf"), False),
    ],
)
def test_is_not_nan_or_inf(value, expected):
    assert is_not_nan_or_inf(value) is expected


def test_format_number():
    assert format_number(-5.0) == "-5"
    assert format_number(2.25) == "2.25"
    assert format_number(-0.0) == "0"
