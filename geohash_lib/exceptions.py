"""
Exception hierarchy for geohash computations.

Every failure the computation can report derives from GeohashError so
callers can catch one type. Nothing here is retried or defaulted: an
error means no Destination was produced.
"""

from typing import Optional


class GeohashError(Exception):
    """Base class for all geohash computation errors."""
    pass


class InvalidInputError(GeohashError, ValueError):
    """Raised when an input is outside the documented domain (e.g. price scale > 2)."""
    pass


class FetchFailedError(GeohashError):
    """Raised when the index price request fails or returns a non-200 status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ParseFailedError(GeohashError):
    """Raised when the index price response body does not have the expected shape."""

    def __init__(self, message: str, body: str = ""):
        # Keep only an excerpt; bodies can be full HTML error pages
        self.body = body[:200]
        super().__init__(message)


class EngineInitError(GeohashError, RuntimeError):
    """Raised when the MD5 primitive is unavailable in this runtime. Fatal."""
    pass
