"""
Weather lookup constants and enums.
"""

from enum import Enum

DEFAULT_BASE_URL = "https://api.weatherapi.com/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0


class WeatherLookupEndpoint(str, Enum):
    """Weather provider endpoints."""

    SEARCH = "/search.json"
