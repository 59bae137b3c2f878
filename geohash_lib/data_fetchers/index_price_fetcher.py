"""
Dow Jones Industrial Average opening price fetcher.

Provides the index opening the geohash key is built from. The historical
prices endpoint is queried for a lookback window ending on the target
date; it answers with a small CSV table whose rows are most recent first:

    Date, Open, High, Low, Close
    05/26/2005, 10458.68, 10600.00, 10400.00, 10500.00

The opening is the second field of the first data row. The first line is
always treated as a header and its shape is not checked. Row order is
assumed rather than checked: the row date is not compared against the
target.

No retry and no caching; a failed fetch aborts the computation.
"""

import io
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

import httpx
import pandas as pd

from geohash_lib.constants import (
    DAYS_SEARCH_WINDOW,
    DEFAULT_REQUEST_TIMEOUT,
    PRICES_QUERY_PARAMS,
    PRICES_URL,
    USER_AGENT,
)
from geohash_lib.exceptions import FetchFailedError, ParseFailedError
from geohash_lib.logging_config import get_logger
from geohash_lib.utils.market_calendar import format_query_date, lookback_window

logger = get_logger(__name__)

OPEN_FIELD_POSITION = 1  # Date, Open, High, Low, Close


def parse_opening_price(body: str) -> Decimal:
    """
    Extract the most recent opening price from a historical prices body.

    Parameters
    ----------
    body : str
        Response text: header row then comma-and-space separated rows

    Returns
    -------
    Decimal
        Opening value of the first data row, as quoted

    Raises
    ------
    ParseFailedError
        If the body is empty, has no data row, or the field is not numeric.
    """
    try:
        # The header row is skipped rather than used for column names, so its
        # width never limits how many fields of the data row are kept
        df = pd.read_csv(
            io.StringIO(body),
            sep=",",
            header=None,
            skiprows=1,
            nrows=1,
            skipinitialspace=True,
            dtype=str,
        )
        raw = df.iloc[0, OPEN_FIELD_POSITION]
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise ParseFailedError(f"Unreadable price table: {e}", body) from e
    except IndexError as e:
        raise ParseFailedError("Price table has no data row or no open field", body) from e

    # Missing fields come back as NaN floats rather than strings
    if not isinstance(raw, str):
        raise ParseFailedError("Opening price field is empty", body)

    try:
        opening = Decimal(raw.strip())
    except InvalidOperation as e:
        raise ParseFailedError(f"Opening price is not a number: {raw!r}", body) from e

    if not opening.is_finite():
        raise ParseFailedError(f"Opening price is not finite: {raw!r}", body)
    return opening


class IndexPriceFetcher:
    """
    Fetcher for the most recent DJIA opening on or before a date.

    Example
    -------
    >>> fetcher = IndexPriceFetcher()
    >>> opening = await fetcher.fetch_opening(date(2005, 5, 26))
    >>> opening
    Decimal('10458.68')

    >>> # Inject a client (e.g. with httpx.MockTransport) for tests
    >>> async with httpx.AsyncClient(transport=transport) as client:
    ...     opening = await IndexPriceFetcher(client=client).fetch_opening(day)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        prices_url: str = PRICES_URL,
        user_agent: str = USER_AGENT,
        lookback_days: int = DAYS_SEARCH_WINDOW,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """
        Initialize the fetcher.

        Parameters
        ----------
        client : httpx.AsyncClient, optional
            Shared client; when omitted a client is opened per request
        prices_url : str
            Historical prices download endpoint
        user_agent : str
            Browser-like User-Agent; the endpoint blocks obvious bots
        lookback_days : int
            Calendar days searched back from the target date
        timeout : float
            Request timeout in seconds
        """
        self.client = client
        self.prices_url = prices_url
        self.user_agent = user_agent
        self.lookback_days = lookback_days
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings, client: Optional[httpx.AsyncClient] = None) -> "IndexPriceFetcher":
        """Build a fetcher from GeohashSettings."""
        return cls(
            client=client,
            prices_url=settings.prices_url,
            user_agent=settings.user_agent,
            lookback_days=settings.lookback_days,
            timeout=settings.request_timeout,
        )

    def build_query_params(self, target: date) -> Dict[str, str]:
        """Query parameters selecting the lookback window ending on target."""
        start, end = lookback_window(target, self.lookback_days)
        params = dict(PRICES_QUERY_PARAMS)
        params["startDate"] = format_query_date(start)
        params["endDate"] = format_query_date(end)
        return params

    async def fetch_opening(self, target: date) -> Decimal:
        """
        Fetch the most recent opening price on or before target.

        Raises
        ------
        FetchFailedError
            On a non-200 response or a transport error
        ParseFailedError
            If the response body does not contain an opening price
        """
        params = self.build_query_params(target)
        logger.info(
            "index_price_request",
            target=target.isoformat(),
            start_date=params["startDate"],
            end_date=params["endDate"],
        )

        if self.client is not None:
            response = await self._get(self.client, params)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await self._get(client, params)

        if response.status_code != 200:
            logger.error(
                "index_price_fetch_failed",
                target=target.isoformat(),
                status_code=response.status_code,
            )
            raise FetchFailedError(
                f"Illegal status code from {self.prices_url}: {response.status_code}",
                status_code=response.status_code,
            )

        opening = parse_opening_price(response.text)
        logger.info("index_price_fetched", target=target.isoformat(), opening=str(opening))
        return opening

    async def _get(self, client: httpx.AsyncClient, params: Dict[str, str]) -> httpx.Response:
        try:
            return await client.get(
                self.prices_url,
                params=params,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("index_price_fetch_failed", error=str(e))
            raise FetchFailedError(f"Request to {self.prices_url} failed: {e}") from e
