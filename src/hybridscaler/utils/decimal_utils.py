# src/hybridscaler/utils/decimal_utils.py
"""
Exact decimal arithmetic helpers.

Resource quantities, ratios and costs are never handled as binary floats.
Addition, subtraction and multiplication run under ``EXACT_CONTEXT`` and are
therefore exact; every division goes through :func:`quo_round`, which rounds
the quotient to a fixed number of fractional digits with an explicit rounding
mode.
"""

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    localcontext,
)

from ..core.exceptions import InvalidInputError

# Never divide with the "/" operator under this context: a non-terminating
# quotient would try to expand to MAX_PREC digits.
EXACT_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero],
)

# Fractional digits kept for intermediate ratios.
RATIO_SCALE = 8

ONE = Decimal(1)
TWO = Decimal(2)
HUNDRED = Decimal(100)

ROUNDING_MODES = (ROUND_HALF_UP, ROUND_CEILING, ROUND_FLOOR, ROUND_DOWN, ROUND_UP)


def exact():
    """Context manager switching the current thread to exact arithmetic."""
    return localcontext(EXACT_CONTEXT)


def to_decimal(value) -> Decimal:
    """Converts ints, strings and decimals to ``Decimal`` without going through float."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # repr() keeps the shortest round-tripping representation
        return Decimal(repr(value))
    return Decimal(value)


def quo_round(x: Decimal, y: Decimal, scale: int, rounding: str) -> Decimal:
    """
    Returns ``x / y`` rounded to ``scale`` fractional digits.

    The quotient is computed exactly (integer division plus remainder) before
    the rounding mode is applied, so no double rounding can occur.

    Raises:
        InvalidInputError: If ``y`` is zero.
    """
    if rounding not in ROUNDING_MODES:
        raise ValueError(f"unsupported rounding mode {rounding}")
    if y == 0:
        raise InvalidInputError("division by zero")

    with exact():
        shifted = x.scaleb(scale)
        quotient = shifted // y
        remainder = shifted - quotient * y

        if remainder != 0:
            negative = (x < 0) != (y < 0)
            step = -ONE if negative else ONE

            if rounding == ROUND_UP:
                quotient += step
            elif rounding == ROUND_CEILING and not negative:
                quotient += step
            elif rounding == ROUND_FLOOR and negative:
                quotient += step
            elif rounding == ROUND_HALF_UP and abs(remainder) * TWO >= abs(y):
                quotient += step

        return quotient.scaleb(-scale)


def round_to(value: Decimal, scale: int, rounding: str) -> Decimal:
    """Rounds ``value`` to ``scale`` fractional digits."""
    with exact():
        return value.quantize(ONE.scaleb(-scale), rounding=rounding)


def limit_value(desired: Decimal, minimum: Decimal, maximum: Decimal) -> Decimal:
    """Limits ``desired`` to the range ``[minimum, maximum]``."""
    if desired < minimum:
        return minimum
    if desired > maximum:
        return maximum
    return desired


def dec_to_int(value: Decimal) -> int:
    """Truncates the fractional digits of ``value``."""
    return int(value)
