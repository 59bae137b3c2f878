"""
Data fetcher modules - network access for geohash inputs.

All data fetching logic is centralized here so that:
- I/O stays separate from the pure hash pipeline
- Error handling and logging are consistent
- Tests can inject a mock transport
"""

from .index_price_fetcher import IndexPriceFetcher, parse_opening_price

__all__ = [
    "IndexPriceFetcher",
    "parse_opening_price",
]
