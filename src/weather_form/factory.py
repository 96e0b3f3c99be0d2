"""Wiring of the form engine and chatbot from settings."""

from weather_form.ai.base import ChatProvider
from weather_form.ai.chat.service import WeatherChatService
from weather_form.ai.gemini.provider import GeminiChatProvider
from weather_form.chatbot.chatbot import WeatherChatbot
from weather_form.config import AppSettings, get_app_settings
from weather_form.form.state import FormState
from weather_form.integrations.weather_lookup.client import WeatherLookupClient
from weather_form.integrations.weather_lookup.config import get_weather_lookup_settings
from weather_form.validation.cache import ResultCache
from weather_form.validation.checker import ExistenceChecker, LocationSearcher
from weather_form.validation.coordinator import ListValidationCoordinator


def create_existence_checker(
    client: LocationSearcher | None = None,
    cache: ResultCache | None = None,
    settings: AppSettings | None = None,
) -> ExistenceChecker:
    """Build a checker; the caller owns it and must ``await checker.close()``."""
    settings = settings or get_app_settings()
    return ExistenceChecker(
        client=client or WeatherLookupClient(get_weather_lookup_settings()),
        cache=cache if cache is not None else ResultCache(),
        settle_delay=settings.settle_delay_seconds,
    )


def create_coordinator(
    checker: ExistenceChecker | None = None,
    form: FormState | None = None,
    settings: AppSettings | None = None,
) -> ListValidationCoordinator:
    """Build a coordinator; must be called inside a running event loop."""
    settings = settings or get_app_settings()
    return ListValidationCoordinator(
        checker=checker or create_existence_checker(settings=settings),
        form=form,
        max_locations=settings.max_locations,
    )


def create_chatbot(
    coordinator: ListValidationCoordinator,
    provider: ChatProvider | None = None,
) -> WeatherChatbot:
    service = WeatherChatService(provider=provider or GeminiChatProvider())
    return WeatherChatbot(coordinator=coordinator, chat_service=service)
