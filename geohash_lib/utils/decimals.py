"""
Decimal coercion and validation helpers.

All coordinate and price arithmetic is done in decimal.Decimal; binary
floats cannot represent 16**16 divisions at the required precision.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from geohash_lib.exceptions import InvalidInputError

DecimalLike = Union[Decimal, int, str, float]


def as_decimal(value: DecimalLike, name: str = "value") -> Decimal:
    """
    Coerce a value to a finite Decimal.

    Floats are converted through their shortest repr so that 10458.68
    becomes Decimal('10458.68') rather than its binary expansion.

    Raises
    ------
    InvalidInputError
        If the value is not numeric, or is NaN or infinite.
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be numeric, got bool")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidInputError(f"{name} is not a decimal number: {value!r}") from e

    if not result.is_finite():
        raise InvalidInputError(f"{name} must be finite, got {result}")
    return result


def decimal_scale(value: Decimal) -> int:
    """Number of digits after the decimal point (negative for values like 1E+3)."""
    return -value.as_tuple().exponent
