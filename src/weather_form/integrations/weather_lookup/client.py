"""Async client for the weather provider's location search."""

import httpx
from pydantic import TypeAdapter, ValidationError

from weather_form.integrations.weather_lookup.config import WeatherLookupSettings
from weather_form.integrations.weather_lookup.constants import WeatherLookupEndpoint
from weather_form.integrations.weather_lookup.exceptions import (
    WeatherLookupAuthenticationError,
    WeatherLookupBadRequestError,
    WeatherLookupConfigurationError,
    WeatherLookupConnectionError,
    WeatherLookupError,
    WeatherLookupRateLimitError,
    WeatherLookupServerError,
    WeatherLookupTimeoutError,
)
from weather_form.integrations.weather_lookup.schemas import (
    LocationMatch,
    LocationSearchQuery,
)
from weather_form.utils.logger import logger

_matches_adapter = TypeAdapter(list[LocationMatch])


class WeatherLookupClient:
    """Async client for the location search endpoint.

    Answers "does this (city, country) exist" with the list of candidate
    locations the provider knows about. Handles authentication and maps
    transport and HTTP failures onto ``WeatherLookupError`` subclasses.
    """

    def __init__(
        self,
        settings: WeatherLookupSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the lookup client.

        Args:
            settings: Lookup settings with API key, base URL and timeout
            transport: Optional httpx transport, mainly for tests
        """
        self.settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "WeatherLookupClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _ensure_client(self) -> None:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                transport=self._transport,
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, endpoint: str, params: dict) -> object:
        """Issue a GET request and return the decoded JSON body.

        Raises:
            WeatherLookupError: For any transport, HTTP or decoding failure
        """
        await self._ensure_client()

        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.TimeoutException as e:
            raise WeatherLookupTimeoutError(
                f"Request timed out: {e}", timeout_duration=self.settings.timeout
            ) from e
        except httpx.RequestError as e:
            raise WeatherLookupConnectionError(
                f"Request error: {e}", original_error=e
            ) from e

        if response.status_code in (401, 403):
            raise WeatherLookupAuthenticationError(status_code=response.status_code)
        elif response.status_code == 400:
            raise WeatherLookupBadRequestError(f"Bad request: {response.text}")
        elif response.status_code == 429:
            raise WeatherLookupRateLimitError()
        elif response.status_code >= 500:
            raise WeatherLookupServerError(
                f"Server error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise WeatherLookupError(
                f"HTTP error: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except ValueError as e:
            raise WeatherLookupError(f"Invalid JSON in response: {e}") from e

    async def search(self, city: str, country: str) -> list[LocationMatch]:
        """Search the provider for locations matching a city and country.

        Args:
            city: City name as typed by the user
            country: Country name as typed by the user

        Returns:
            Candidate locations; empty when the provider knows no match

        Raises:
            WeatherLookupConfigurationError: If no API key is configured
            WeatherLookupError: For API and transport errors
        """
        if not self.settings.api_key:
            raise WeatherLookupConfigurationError()

        query = LocationSearchQuery(city=city, country=country)
        logger.info("Searching locations", city=city, country=country)

        response_data = await self._get(
            WeatherLookupEndpoint.SEARCH.value,
            {"key": self.settings.api_key, "q": query.q},
        )

        try:
            return _matches_adapter.validate_python(response_data)
        except ValidationError as e:
            logger.error("Failed to parse location search response", error=str(e))
            raise WeatherLookupError(
                f"Invalid response format: {e}", response_data=response_data
            ) from e
