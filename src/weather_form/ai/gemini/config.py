"""
Configuration management for the Gemini integration package.

This module handles environment variable configuration for the Gemini chat
provider using Pydantic settings. The API key falls back to the AI Studio
key of the application settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_form.config import get_app_settings
from weather_form.utils.logger import logger


class GeminiSettings(BaseSettings):
    """Configuration for Gemini integration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="GEMINI_"
    )

    api_key: str | None = Field(default=None, description="Gemini API key for authentication")
    model_name: str = Field(default="gemini-2.5-flash", description="Gemini model name to use")
    temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, description="Temperature for content generation"
    )
    top_p: float = Field(default=0.95, gt=0.0, le=1.0, description="Nucleus sampling cutoff")
    max_output_tokens: int = Field(default=1000, gt=0, description="Reply length limit")


_gemini_settings: GeminiSettings | None = None


def get_gemini_settings() -> GeminiSettings:
    """
    Get the global Gemini settings instance.

    Returns:
        GeminiSettings: The global settings instance
    """
    global _gemini_settings
    if _gemini_settings is None:
        settings = GeminiSettings()
        if settings.api_key is None:
            settings.api_key = get_app_settings().ai_studio_api_key
        _gemini_settings = settings
        logger.info("GeminiSettings loaded", model_name=settings.model_name)
    return _gemini_settings


def set_gemini_settings(settings: GeminiSettings | None) -> None:
    """
    Set the global Gemini settings instance.

    Args:
        settings: The settings to set
    """
    global _gemini_settings
    _gemini_settings = settings
