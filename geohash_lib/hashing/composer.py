"""
Compose the destination from a position and two fractional offsets.

Only the integer part of the position matters: it is truncated toward
zero (not floored), so for negative coordinates the offset moves the
destination toward zero. Other implementations floor instead and put
negative-coordinate destinations in a different graticule.
"""

from decimal import ROUND_DOWN, Decimal, localcontext

from geohash_lib.constants import DIVISION_CONTEXT_PREC
from geohash_lib.exceptions import InvalidInputError
from geohash_lib.interfaces.coordinate import Coordinate


def truncate_toward_zero(value: Decimal) -> Decimal:
    """Integer part of a decimal, rounding toward zero (-37.9 -> -37)."""
    return value.to_integral_value(rounding=ROUND_DOWN)


def compose_destination(position: Coordinate, fx: Decimal, fy: Decimal) -> Coordinate:
    """
    Add the x/y offsets to the truncated position.

    Parameters
    ----------
    position : Coordinate
        Current position; any finite decimals are accepted
    fx : Decimal
        Offset from the high digest half, added to latitude
    fy : Decimal
        Offset from the low digest half, added to longitude
    """
    if not fx.is_finite() or not fy.is_finite():
        raise InvalidInputError(f"Offsets must be finite, got ({fx}, {fy})")

    base_x = truncate_toward_zero(position.x)
    base_y = truncate_toward_zero(position.y)

    with localcontext() as ctx:
        # Offsets carry at most 64 fractional digits; the sum is never rounded
        ctx.prec = DIVISION_CONTEXT_PREC + max(base_x.adjusted(), base_y.adjusted(), 0) + 2
        x = base_x + fx
        y = base_y + fy
    return Coordinate(x, y)
