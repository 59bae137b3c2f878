"""
Geohash Library

Computes the daily xkcd #426 geohash destination from a date, the most
recent Dow Jones Industrial Average opening and a current position.

Package Structure:
- hashing/: Canonical key, MD5 engine, digest decoding, composition
- data_fetchers/: Index opening price retrieval over HTTP
- interfaces/: Coordinate value objects and rendering
- utils/: Trading calendar helpers (lookback windows, date formats)
- config_schemas.py: Pydantic settings
- logging_config.py: structlog setup
- cli.py: Command line entry point
"""

from geohash_lib.hashing.geohasher import compute_destination, geo_hash
from geohash_lib.interfaces.coordinate import Coordinate

__version__ = '0.1.0'

__all__ = ["Coordinate", "compute_destination", "geo_hash"]
