"""
FastAPI dependencies for the weather lookup integration.
"""

from collections.abc import AsyncIterator

from weather_form.integrations.weather_lookup.client import WeatherLookupClient
from weather_form.integrations.weather_lookup.config import (
    get_weather_lookup_settings,
)


async def get_weather_lookup_client() -> AsyncIterator[WeatherLookupClient]:
    """
    FastAPI dependency yielding a lookup client that is closed after the request.

    Yields:
        WeatherLookupClient: The configured lookup client
    """
    client = WeatherLookupClient(settings=get_weather_lookup_settings())
    try:
        yield client
    finally:
        await client.close()
