"""
Weather lookup integration package.

Client for the weather provider's location search, used to check that a
(city, country) pair names a real place.
"""

from .client import WeatherLookupClient
from .exceptions import (
    WeatherLookupAuthenticationError,
    WeatherLookupBadRequestError,
    WeatherLookupConfigurationError,
    WeatherLookupConnectionError,
    WeatherLookupError,
    WeatherLookupRateLimitError,
    WeatherLookupServerError,
    WeatherLookupTimeoutError,
)
from .schemas import LocationMatch

__all__ = [
    "LocationMatch",
    "WeatherLookupAuthenticationError",
    "WeatherLookupBadRequestError",
    "WeatherLookupClient",
    "WeatherLookupConfigurationError",
    "WeatherLookupConnectionError",
    "WeatherLookupError",
    "WeatherLookupRateLimitError",
    "WeatherLookupServerError",
    "WeatherLookupTimeoutError",
]
