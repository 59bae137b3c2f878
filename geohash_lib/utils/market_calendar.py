"""
Market Calendar Utility - lookback windows for index price queries

The geohash uses the most recent Dow opening on or before the target
date. Rather than model exchange holidays, the price query spans a fixed
lookback window wide enough to cover any closure run, and the data
source returns the latest session in it.

Design Principles:
- Pure: dates are never mutated, every helper returns a new value
- Deterministic: same input always produces same output
"""

from datetime import date, timedelta
from typing import Tuple

from geohash_lib.constants import DAYS_SEARCH_WINDOW, QUERY_DATE_FORMAT
from geohash_lib.exceptions import InvalidInputError


def minus_days(day: date, days: int) -> date:
    """Return a new date `days` calendar days before `day`."""
    return day - timedelta(days=days)


def lookback_window(target: date, days: int = DAYS_SEARCH_WINDOW) -> Tuple[date, date]:
    """
    Date range to query for the most recent opening on or before target.

    Args:
        target: Geohash date (end of the window)
        days: Calendar days to look back

    Returns:
        Tuple of (start, target)

    Raises:
        InvalidInputError: If days is not positive
    """
    if days < 1:
        raise InvalidInputError(f"Lookback must be at least one day, got {days}")
    return minus_days(target, days), target


def format_query_date(day: date) -> str:
    """Format a date as MM/DD/YYYY for the historical prices endpoint."""
    return day.strftime(QUERY_DATE_FORMAT)
