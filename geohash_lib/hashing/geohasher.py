"""
Geohash computation entry points.

Implements the algorithm from https://xkcd.com/426/:

    key    = "YYYY-MM-DD-<dow opening with 2 decimals>"
    digest = md5(key)
    fx, fy = each 64-bit half of digest as a hex fraction
    dest   = (trunc(lat) + fx, trunc(lon) + fy)

geo_hash() is the pure, synchronous transform. compute_destination()
awaits the index price fetch first and only then runs the transform, so
a failed or cancelled fetch never reaches the hash pipeline.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from geohash_lib.constants import DEFAULT_PRECISION
from geohash_lib.data_fetchers.index_price_fetcher import IndexPriceFetcher
from geohash_lib.hashing.canonical_key import build_canonical_key
from geohash_lib.hashing.composer import compose_destination
from geohash_lib.hashing.fraction_decoder import decode_digest_half, validate_precision
from geohash_lib.hashing.hash_engine import Md5HashEngine, split_digest
from geohash_lib.interfaces.coordinate import Coordinate
from geohash_lib.logging_config import get_logger
from geohash_lib.utils.decimals import DecimalLike

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeohashResult:
    """Outcome of a full computation: the inputs that mattered and the destination."""
    day: date
    index_opening: Decimal
    destination: Coordinate


def geo_hash(
    today: date,
    dow_opening: DecimalLike,
    current_position: Coordinate,
    precision: int = DEFAULT_PRECISION,
    engine: Optional[Md5HashEngine] = None,
) -> Coordinate:
    """
    Compute the geohash destination.

    Parameters
    ----------
    today : date
        Date of the geohash
    dow_opening : Decimal
        Most recent Dow opening; at most two fractional digits
    current_position : Coordinate
        Current position; only accurate to the integer part (76.45 can be
        replaced by 76 and give the same answer)
    precision : int
        Fractional digits kept in each offset
    engine : Md5HashEngine, optional
        Hash engine; a new one is created when omitted

    Returns
    -------
    Coordinate
        Destination coordinates

    Raises
    ------
    InvalidInputError
        If the opening has more than two fractional digits or precision < 1
    EngineInitError
        If MD5 is unavailable

    Examples
    --------
    >>> geo_hash(date(2005, 5, 26), Decimal("10458.68"), Coordinate.of(0, 0))
    Coordinate(x=Decimal('0.857713267707'), y=Decimal('0.54454306955928'))
    """
    validate_precision(precision)
    key = build_canonical_key(today, dow_opening)

    if engine is None:
        engine = Md5HashEngine()
    high, low = split_digest(engine.digest_hex(key))

    fx = decode_digest_half(high, precision)
    fy = decode_digest_half(low, precision)
    destination = compose_destination(current_position, fx, fy)

    logger.debug("geohash_computed", key=key, destination=str(destination))
    return destination


async def compute_destination(
    today: date,
    current_position: Coordinate,
    precision: int = DEFAULT_PRECISION,
    fetcher: Optional[IndexPriceFetcher] = None,
) -> GeohashResult:
    """
    Fetch the most recent Dow opening, then compute the destination.

    Errors from the fetch (FetchFailedError, ParseFailedError) propagate
    before any key is built. EngineInitError is raised before the fetch.
    """
    # Fail fast on bad precision or a missing MD5 before touching the network
    validate_precision(precision)
    engine = Md5HashEngine()

    if fetcher is None:
        fetcher = IndexPriceFetcher()
    opening = await fetcher.fetch_opening(today)

    destination = geo_hash(today, opening, current_position, precision, engine)
    logger.info(
        "geohash_computed",
        day=today.isoformat(),
        index_opening=str(opening),
        destination=str(destination),
    )
    return GeohashResult(day=today, index_opening=opening, destination=destination)
