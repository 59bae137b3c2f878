"""
Configuration schema validation using Pydantic.

Provides the validated settings model for the geohash computation, the
index price fetcher and the CLI. Catches configuration errors at load
time rather than mid-computation.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from geohash_lib.constants import (
    DAYS_SEARCH_WINDOW,
    DEFAULT_DISPLAY_DIGITS,
    DEFAULT_PRECISION,
    DEFAULT_REQUEST_TIMEOUT,
    PRICES_URL,
    USER_AGENT,
)
from geohash_lib.logging_config import LOG_LEVELS


class GeohashSettings(BaseModel):
    """Settings for a geohash run."""

    model_config = ConfigDict(
        extra='forbid',  # Don't allow extra fields
        frozen=True,
    )

    precision: int = Field(DEFAULT_PRECISION, ge=1, description="Fractional digits per offset")
    display_digits: int = Field(
        DEFAULT_DISPLAY_DIGITS, ge=1, description="Significant digits in the simple rendering"
    )
    lookback_days: int = Field(
        DAYS_SEARCH_WINDOW, ge=1, description="Calendar days searched for the latest opening"
    )
    prices_url: str = Field(PRICES_URL, description="Historical prices download endpoint")
    user_agent: str = Field(USER_AGENT, min_length=1, description="User-Agent sent with the request")
    request_timeout: float = Field(
        DEFAULT_REQUEST_TIMEOUT, gt=0, description="HTTP timeout in seconds"
    )
    log_level: str = Field("INFO", description="Logging level")

    @field_validator('prices_url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure the endpoint is an http(s) URL."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"prices_url must be an http(s) URL, got {v!r}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one logging understands."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {list(LOG_LEVELS)}")
        return level


def load_settings(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> GeohashSettings:
    """
    Load settings from an optional YAML file, then apply overrides.

    The file may hold the fields at top level or nested under a
    `geohash:` section. Overrides whose value is None are ignored so CLI
    options that were not given fall through to the file or defaults.

    Args:
        path: Optional YAML file path
        **overrides: Field values taking precedence over the file

    Returns:
        Validated settings

    Raises:
        ValidationError: If any value is invalid
        FileNotFoundError: If path is given but missing
    """
    config_dict: Dict[str, Any] = {}

    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        # Extract geohash section if nested
        config_dict.update(data.get('geohash', data))

    config_dict.update({k: v for k, v in overrides.items() if v is not None})
    return GeohashSettings(**config_dict)
