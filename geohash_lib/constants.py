"""
Central constants for the geohash computation.

Single source of truth for the algorithm parameters and the index price
endpoint details shared by the fetcher, the settings model and the CLI.
"""

from decimal import Decimal

# Algorithm parameters
DEFAULT_PRECISION = 14        # Fractional digits kept per decoded offset
DEFAULT_DISPLAY_DIGITS = 5    # Significant digits in the simple rendering
PRICE_MAX_SCALE = 2           # Index prices are quoted in cents
DIGEST_HEX_LENGTH = 32        # 128-bit MD5 digest
DIGEST_HALF_LENGTH = 16       # 64 bits per axis

# 16**16 == 2**64, so any half divided by it terminates within 64 fractional digits
HEX_DIVISION_FACTOR = Decimal(16) ** DIGEST_HALF_LENGTH
DIVISION_CONTEXT_PREC = 80

# Date formats
CANONICAL_DATE_FORMAT = "%Y-%m-%d"   # Used in the hashed key
QUERY_DATE_FORMAT = "%m/%d/%Y"       # Used by the historical prices endpoint

# Index price endpoint
DAYS_SEARCH_WINDOW = 30  # If the Dow is closed for longer than a month there are bigger problems
DEFAULT_REQUEST_TIMEOUT = 10.0  # Seconds

PRICES_URL = (
    "https://www.wsj.com/market-data/quotes/index/DJIA/historical-prices/download"
)

PRICES_QUERY_PARAMS = {
    "MOD_VIEW": "page",
    "num_rows": "1",
    "range_days": "1",
}

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/102.0.0.0 Safari/537.36"
)

# Human-facing rendering
MAPS_URL_FORMAT = "https://www.google.com/maps/place/{x},{y}"
