"""
Application-wide settings.

The two secrets (the AI Studio key used by the chat provider and the weather
lookup key) are read from the environment or from a static JSON file,
``app-config.json`` by default, shaped like::

    {"AI_STUDIO_API_KEY": "...", "WEATHER_API_KEY": "..."}

Missing keys are not an error: the chat falls back to mock replies and
location lookups fail softly.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from weather_form.utils.logger import logger

CONFIG_FILE_ENV_VAR = "WEATHER_FORM_CONFIG_FILE"
DEFAULT_CONFIG_FILE = "app-config.json"


def get_config_file_path() -> Path:
    """Path of the static JSON config file."""
    return Path(os.getenv(CONFIG_FILE_ENV_VAR, DEFAULT_CONFIG_FILE))


class StaticConfigFileSource(JsonConfigSettingsSource):
    """JSON file source that treats an unreadable file as an empty one."""

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        try:
            return super()._read_file(file_path)
        except (OSError, ValueError) as e:
            logger.error(
                "Could not load config file", path=str(file_path), error=str(e)
            )
            return {}


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", populate_by_name=True
    )

    ai_studio_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AI_STUDIO_API_KEY", "ai_studio_api_key"),
        description="API key for the conversational assistant",
    )
    weather_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WEATHER_API_KEY", "weather_api_key"),
        description="API key for the location search endpoint",
    )
    settle_delay_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Wait before a location lookup is sent to the provider",
    )
    max_locations: int | None = Field(
        default=5,
        ge=1,
        description="Upper bound on the number of locations (None disables it)",
    )
    client_base_url: str = Field(
        default="http://localhost:4200", description="Frontend origin allowed by CORS"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # environment wins over the static file
        return (
            init_settings,
            env_settings,
            StaticConfigFileSource(settings_cls, json_file=get_config_file_path()),
            file_secret_settings,
        )


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
        logger.info(
            "AppSettings loaded",
            config_file=str(get_config_file_path()),
            has_ai_key=_app_settings.ai_studio_api_key is not None,
            has_weather_key=_app_settings.weather_api_key is not None,
        )
    return _app_settings


def set_app_settings(settings: AppSettings | None) -> None:
    """Replace the global settings instance (``None`` forces a reload)."""
    global _app_settings
    _app_settings = settings
