"""
Configuration management for the weather lookup integration.

Settings come from ``WEATHER_*`` environment variables. When no key is set
there, the key from the application settings (which also reads the static
config file) is used instead.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_form.config import get_app_settings
from weather_form.integrations.weather_lookup.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
)
from weather_form.utils.logger import logger


class WeatherLookupSettings(BaseSettings):
    """Configuration for the weather lookup integration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="WEATHER_"
    )

    api_key: str | None = Field(
        default=None, description="Weather provider API key for authentication"
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Weather provider API base URL"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds"
    )


_weather_lookup_settings: WeatherLookupSettings | None = None


def get_weather_lookup_settings() -> WeatherLookupSettings:
    """
    Get the global weather lookup settings instance.

    Returns:
        WeatherLookupSettings: The global settings instance
    """
    global _weather_lookup_settings
    if _weather_lookup_settings is None:
        settings = WeatherLookupSettings()
        if settings.api_key is None:
            settings.api_key = get_app_settings().weather_api_key
        _weather_lookup_settings = settings
        logger.info("WeatherLookupSettings loaded", base_url=settings.base_url)
    return _weather_lookup_settings


def set_weather_lookup_settings(settings: WeatherLookupSettings | None) -> None:
    """
    Set the global weather lookup settings instance.

    Args:
        settings: The settings to set
    """
    global _weather_lookup_settings
    _weather_lookup_settings = settings
