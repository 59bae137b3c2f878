"""
Canonical key construction.

The key is the exact string fed to MD5: the date as YYYY-MM-DD, a dash,
and the index opening with exactly two fractional digits. Any deviation
(missing trailing zero, exponent notation) yields a different digest and
a different destination, so formatting is strict.
"""

from datetime import date
from decimal import Decimal, localcontext

from geohash_lib.constants import CANONICAL_DATE_FORMAT, PRICE_MAX_SCALE
from geohash_lib.exceptions import InvalidInputError
from geohash_lib.utils.decimals import DecimalLike, as_decimal, decimal_scale

_CENTS = Decimal(1).scaleb(-PRICE_MAX_SCALE)


def index_price_scale(price: Decimal) -> int:
    """Return the scale of an index price, raising if it exceeds cents precision."""
    scale = decimal_scale(price)
    if scale > PRICE_MAX_SCALE:
        raise InvalidInputError(
            f"Index price {price} has scale {scale}; at most {PRICE_MAX_SCALE} allowed"
        )
    return scale


def format_index_price(price: DecimalLike) -> str:
    """
    Format an index price with exactly two fractional digits.

    Examples
    --------
    >>> format_index_price(Decimal("10458.6"))
    '10458.60'
    >>> format_index_price(Decimal("10458"))
    '10458.00'
    """
    price = as_decimal(price, "index price")
    index_price_scale(price)
    # Exact: scale <= 2 means quantizing only appends zeros
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, price.adjusted() + 1 + PRICE_MAX_SCALE)
        return format(price.quantize(_CENTS), "f")


def format_canonical_date(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    if day.year < 1000:
        # strftime does not zero-pad years on every platform
        return day.isoformat()
    return day.strftime(CANONICAL_DATE_FORMAT)


def build_canonical_key(day: date, index_opening: DecimalLike) -> str:
    """
    Build the string hashed by the geohash algorithm.

    Parameters
    ----------
    day : date
        Date of the geohash
    index_opening : Decimal
        Most recent Dow opening; at most two fractional digits

    Returns
    -------
    str
        e.g. '2005-05-26-10458.68'

    Raises
    ------
    InvalidInputError
        If the price has more than two fractional digits or is not finite.
    """
    return f"{format_canonical_date(day)}-{format_index_price(index_opening)}"
