"""Decimal helpers. All money and percentage rounding is 2 dp, half-up."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce API floats/ints/strings to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value))


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_int(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def mean2(values: list[Decimal]) -> Decimal:
    """Arithmetic mean rounded to 2 dp; 0 for an empty list."""
    if not values:
        return round2(ZERO)
    return round2(sum(values, ZERO) / Decimal(len(values)))
