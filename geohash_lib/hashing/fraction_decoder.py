"""
Decode digest halves into fractional coordinate offsets.

Each 16-hex-char half is read as an unsigned 64-bit integer and divided
by 16**16, giving a value in [0, 1). The quotient is computed exactly,
rounded half-up to the requested number of fractional digits, and then
normalized. Normalizing drops trailing zeros only; it never changes the
value.

Rounding can carry a half close to 0xffffffffffffffff up to exactly 1.
That boundary value is returned as-is.
"""

import string
from decimal import ROUND_HALF_UP, Decimal, localcontext

from geohash_lib.constants import (
    DEFAULT_PRECISION,
    DIGEST_HALF_LENGTH,
    DIVISION_CONTEXT_PREC,
    HEX_DIVISION_FACTOR,
)
from geohash_lib.exceptions import InvalidInputError

_HEX_DIGITS = frozenset(string.hexdigits)


def validate_precision(precision: int) -> int:
    """Ensure precision is a positive integer."""
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
        raise InvalidInputError(f"precision must be a positive integer, got {precision!r}")
    return precision


def digest_half_to_int(half: str) -> int:
    """Parse a 16-char hex digest half as an unsigned 64-bit integer."""
    if len(half) != DIGEST_HALF_LENGTH or not _HEX_DIGITS.issuperset(half):
        raise InvalidInputError(
            f"Digest half must be {DIGEST_HALF_LENGTH} hex chars, got {half!r}"
        )
    return int(half, 16)


def decode_digest_half(half: str, precision: int = DEFAULT_PRECISION) -> Decimal:
    """
    Convert one digest half into a fractional offset.

    Parameters
    ----------
    half : str
        16 hex characters
    precision : int
        Fractional digits kept after rounding half-up (default 14)

    Returns
    -------
    Decimal
        Offset in [0, 1], normalized

    Examples
    --------
    >>> decode_digest_half("db9318c2259923d0")
    Decimal('0.857713267707')
    >>> decode_digest_half("ffffffffffffffff")
    Decimal('1')
    """
    value = digest_half_to_int(half)
    precision = validate_precision(precision)

    with localcontext() as ctx:
        # Wide enough for the exact quotient and for the quantized result
        ctx.prec = max(DIVISION_CONTEXT_PREC, precision + 2)
        exact = Decimal(value) / HEX_DIVISION_FACTOR
        rounded = exact.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        return rounded.normalize()
