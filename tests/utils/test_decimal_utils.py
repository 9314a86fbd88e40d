# tests/utils/test_decimal_utils.py
"""
Unit tests for the exact decimal helpers.
"""

from decimal import ROUND_CEILING, ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, ROUND_UP, Decimal

import pytest

from hybridscaler.core.exceptions import InvalidInputError
from hybridscaler.utils.decimal_utils import dec_to_int, exact, limit_value, quo_round, round_to, to_decimal


@pytest.mark.parametrize(
    "x, y, scale, rounding, expected",
    [
        ("1", "3", 8, ROUND_HALF_UP, "0.33333333"),
        ("2", "3", 8, ROUND_HALF_UP, "0.66666667"),
        ("1", "2", 0, ROUND_HALF_UP, "1"),
        ("-1", "2", 0, ROUND_HALF_UP, "-1"),
        ("1", "3", 0, ROUND_UP, "1"),
        ("-3", "2", 0, ROUND_UP, "-2"),
        ("3", "2", 0, ROUND_DOWN, "1"),
        ("-3", "2", 0, ROUND_DOWN, "-1"),
        ("1", "2", 0, ROUND_CEILING, "1"),
        ("-1", "2", 0, ROUND_CEILING, "0"),
        ("1", "2", 0, ROUND_FLOOR, "0"),
        ("-1", "2", 0, ROUND_FLOOR, "-1"),
        ("0.3", "0.15", 8, ROUND_DOWN, "2"),
    ],
)
def test_quo_round(x, y, scale, rounding, expected):
    """quo_round applies the rounding mode to the exact quotient."""
    assert quo_round(Decimal(x), Decimal(y), scale, rounding) == Decimal(expected)


def test_quo_round_keeps_scale_digits():
    result = quo_round(Decimal(2), Decimal(3), 8, ROUND_DOWN)
    assert result == Decimal("0.66666666")
    assert result.as_tuple().exponent == -8


def test_quo_round_division_by_zero():
    with pytest.raises(InvalidInputError, match="division by zero"):
        quo_round(Decimal(1), Decimal(0), 8, ROUND_HALF_UP)


def test_quo_round_rejects_unknown_rounding_mode():
    with pytest.raises(ValueError):
        quo_round(Decimal(1), Decimal(3), 8, "ROUND_05UP")


def test_exact_context_does_not_round_products():
    """Multiplication under the exact context keeps every digit."""
    with exact():
        product = Decimal("0.123456789123456789") * Decimal("1000000000.000000001")
    assert product == Decimal("123456789.123456789123456789123456789")


def test_round_to():
    assert round_to(Decimal("0.123456785"), 8, ROUND_HALF_UP) == Decimal("0.12345679")
    assert round_to(Decimal("4.01"), 0, ROUND_CEILING) == Decimal(5)


def test_limit_value():
    assert limit_value(Decimal(5), Decimal(1), Decimal(10)) == Decimal(5)
    assert limit_value(Decimal(0), Decimal(1), Decimal(10)) == Decimal(1)
    assert limit_value(Decimal(11), Decimal(1), Decimal(10)) == Decimal(10)


def test_to_decimal_and_dec_to_int():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("250") == Decimal(250)
    assert to_decimal(3) == Decimal(3)
    assert dec_to_int(Decimal("6.99")) == 6
