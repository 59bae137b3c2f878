"""
Tests for the DJIA opening price fetcher.
HTTP is served by httpx.MockTransport; no network access.
"""

import asyncio
from datetime import date
from decimal import Decimal

import httpx
import pytest

from geohash_lib.config_schemas import GeohashSettings
from geohash_lib.constants import USER_AGENT
from geohash_lib.data_fetchers.index_price_fetcher import IndexPriceFetcher, parse_opening_price
from geohash_lib.exceptions import FetchFailedError, ParseFailedError

PRICES_BODY = (
    "Date, Open, High, Low, Close\n"
    "05/26/2005, 10458.68, 10600.00, 10400.00, 10500.00\n"
)


def fetch_with(handler, target=date(2005, 5, 26), **kwargs):
    """Run fetch_opening against a mock transport."""
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = IndexPriceFetcher(client=client, **kwargs)
            return await fetcher.fetch_opening(target)

    return asyncio.run(run())


class TestParseOpeningPrice:

    def test_sample_body(self):
        assert parse_opening_price(PRICES_BODY) == Decimal("10458.68")

    def test_first_data_row_wins(self):
        body = PRICES_BODY + "05/25/2005, 10400.00, 10500.00, 10300.00, 10450.00\n"
        assert parse_opening_price(body) == Decimal("10458.68")

    def test_keeps_quoted_scale(self):
        body = "Date, Open, High, Low, Close\n05/26/2005, 10458.6, 1, 1, 1\n"
        assert str(parse_opening_price(body)) == "10458.6"

    def test_without_trailing_newline(self):
        assert parse_opening_price(PRICES_BODY.rstrip("\n")) == Decimal("10458.68")

    @pytest.mark.parametrize("header", [
        "Date",
        "DJIA historical prices",
        "Date, Open",
    ])
    def test_header_shape_is_ignored(self, header):
        body = f"{header}\n05/26/2005, 10458.68, 10600.00, 10400.00, 10500.00\n"
        assert parse_opening_price(body) == Decimal("10458.68")

    def test_later_rows_may_be_ragged(self):
        body = PRICES_BODY + "05/25/2005, 10400.00, 10500.00, 10300.00, 10450.00, 1, 2\n"
        assert parse_opening_price(body) == Decimal("10458.68")

    @pytest.mark.parametrize("body", [
        "",
        "Date, Open, High, Low, Close\n",
        "Date\n05/26/2005\n",
        "Date, Open, High, Low, Close\n05/26/2005\n",
        "Date, Open, High, Low, Close\n05/26/2005, n/a, 1, 1, 1\n",
        "<html><body>Access denied</body></html>",
    ])
    def test_malformed_bodies(self, body):
        with pytest.raises(ParseFailedError):
            parse_opening_price(body)


class TestIndexPriceFetcher:

    def test_returns_opening(self):
        def handler(request):
            return httpx.Response(200, text=PRICES_BODY)

        assert fetch_with(handler) == Decimal("10458.68")

    def test_request_shape(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=PRICES_BODY)

        fetch_with(handler, prices_url="https://prices.example.com/djia")

        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "prices.example.com"
        assert request.url.path == "/djia"
        assert request.headers["User-Agent"] == USER_AGENT
        params = request.url.params
        assert params["startDate"] == "04/26/2005"
        assert params["endDate"] == "05/26/2005"
        assert params["num_rows"] == "1"
        assert params["MOD_VIEW"] == "page"

    def test_lookback_window_is_configurable(self):
        fetcher = IndexPriceFetcher(lookback_days=3)
        params = fetcher.build_query_params(date(2024, 3, 1))
        assert params["startDate"] == "02/27/2024"
        assert params["endDate"] == "03/01/2024"

    @pytest.mark.parametrize("status", [301, 403, 404, 500, 503])
    def test_non_200_fails(self, status):
        def handler(request):
            return httpx.Response(status, text=PRICES_BODY)

        with pytest.raises(FetchFailedError) as exc_info:
            fetch_with(handler)
        assert exc_info.value.status_code == status

    def test_redirect_is_followed(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(302, headers={"Location": "https://prices.example.com/new"})
            return httpx.Response(200, text=PRICES_BODY)

        assert fetch_with(handler, prices_url="https://prices.example.com/old") == Decimal("10458.68")

    def test_transport_error_fails(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchFailedError) as exc_info:
            fetch_with(handler)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    def test_bad_body_fails_to_parse(self):
        def handler(request):
            return httpx.Response(200, text="<html>blocked</html>")

        with pytest.raises(ParseFailedError) as exc_info:
            fetch_with(handler)
        assert "blocked" in exc_info.value.body

    def test_from_settings(self):
        settings = GeohashSettings(lookback_days=7, user_agent="test-agent", request_timeout=2.5)
        fetcher = IndexPriceFetcher.from_settings(settings)
        assert fetcher.lookback_days == 7
        assert fetcher.user_agent == "test-agent"
        assert fetcher.timeout == 2.5
        assert fetcher.client is None
