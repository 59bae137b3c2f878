"""
Coordinate value object.

Used both for the caller's current Position and for the computed
Destination. Latitude is x, longitude is y.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from geohash_lib.constants import MAPS_URL_FORMAT
from geohash_lib.exceptions import InvalidInputError
from geohash_lib.utils.decimals import DecimalLike, as_decimal


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable latitude/longitude pair in decimal degrees.

    Attributes
    ----------
    x : Decimal
        Latitude
    y : Decimal
        Longitude

    Examples
    --------
    >>> pos = Coordinate.of("37.421542", "-122.085589")
    >>> pos.to_simple_string(5)
    '(37.422, -122.09)'
    """
    x: Decimal
    y: Decimal

    def __post_init__(self):
        if not isinstance(self.x, Decimal) or not isinstance(self.y, Decimal):
            raise InvalidInputError("Coordinate axes must be Decimal; use Coordinate.of()")
        if not self.x.is_finite() or not self.y.is_finite():
            raise InvalidInputError(f"Coordinate axes must be finite, got ({self.x}, {self.y})")

    @classmethod
    def of(cls, x: DecimalLike, y: DecimalLike) -> "Coordinate":
        """Build a Coordinate from anything as_decimal accepts."""
        return cls(as_decimal(x, "latitude"), as_decimal(y, "longitude"))

    def to_simple_string(self, rounding: int) -> str:
        """
        Render as '(x, y)' with each axis rounded half-up to `rounding`
        significant digits.
        """
        if rounding < 1:
            raise InvalidInputError(f"rounding must be positive, got {rounding}")

        with localcontext() as ctx:
            ctx.prec = rounding
            ctx.rounding = ROUND_HALF_UP
            x = +self.x
            y = +self.y
        return f"({x:f}, {y:f})"

    def to_google_maps_url(self) -> str:
        """Map link embedding the full precision coordinates in plain notation."""
        return MAPS_URL_FORMAT.format(x=format(self.x, "f"), y=format(self.y, "f"))

    def __str__(self) -> str:
        return f"({self.x:f}, {self.y:f})"
