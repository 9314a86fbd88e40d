from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Optional, Union

from ..core.exceptions import InvalidInputError
from .decimal_utils import exact, round_to, to_decimal

BINARY_SUFFIXES = {
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
}

DECIMAL_SUFFIXES = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}

# Suffixes used when rendering fractional quantities, finest last.
FRACTIONAL_SUFFIXES = (("m", 3), ("u", 6), ("n", 9))

Quantity = Union[str, int, float, Decimal]


def parse_quantity(quantity: Optional[Quantity]) -> Decimal:
    """
    Parse kubernetes quantity to Decimal.
    Adapted from kubernetes-python utils.

    Raises:
        InvalidInputError: If the quantity is not a valid Kubernetes quantity.
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, (int, float, Decimal)):
        return to_decimal(quantity)

    quantity = str(quantity).strip()
    number, multiplier = quantity, Decimal(1)

    if quantity[-2:] in BINARY_SUFFIXES:
        number, multiplier = quantity[:-2], BINARY_SUFFIXES[quantity[-2:]]
    elif quantity[-1:] in DECIMAL_SUFFIXES:
        number, multiplier = quantity[:-1], DECIMAL_SUFFIXES[quantity[-1:]]

    try:
        value = Decimal(number)
    except InvalidOperation as e:
        raise InvalidInputError(f"invalid quantity '{quantity}'") from e

    if not value.is_finite():
        raise InvalidInputError(f"invalid quantity '{quantity}'")

    with exact():
        return value * multiplier


def format_quantity(value: Decimal) -> str:
    """
    Renders a decimal as a Kubernetes quantity string.

    Whole values are rendered without suffix ("2", "134217728"), fractional
    values with the coarsest exact suffix ("150m", "2500u"). Anything finer
    than a nanounit is rounded up, as the API server does.
    """
    if value == value.to_integral_value():
        return str(int(value))

    with exact():
        for suffix, digits in FRACTIONAL_SUFFIXES:
            scaled = value.scaleb(digits)
            if scaled == scaled.to_integral_value():
                return f"{int(scaled)}{suffix}"

    nanos = round_to(value.scaleb(9), 0, ROUND_CEILING)
    return f"{int(nanos)}n"
