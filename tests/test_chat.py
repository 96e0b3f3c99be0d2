"""Tests for the chat service, its mock fallback and the Gemini provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from weather_form.ai.base import ChatReply, ConversationMessage, TokenUsage
from weather_form.ai.chat import MockWeatherResponder, WeatherChatService
from weather_form.ai.chat.mock import CONDITIONS
from weather_form.ai.gemini.config import GeminiSettings
from weather_form.ai.gemini.exceptions import (
    GeminiAPIError,
    GeminiConfigurationError,
    GeminiContentGenerationError,
)
from weather_form.ai.gemini.provider import GeminiChatProvider

QUESTION = (
    "What's the weather forecast for Paris, France on Monday, October 19, 2026? "
    "Please provide the temperature in °C."
)


class TestMockWeatherResponder:
    def test_reply_names_location_and_date(self):
        reply = MockWeatherResponder(seed=1).respond(QUESTION)

        assert reply.is_fallback
        assert reply.text.startswith(
            "Weather forecast for Paris, France on Monday, October 19, 2026:"
        )
        assert "°C" in reply.text
        assert "km/h" in reply.text
        assert any(condition in reply.text for condition in CONDITIONS)

    def test_fahrenheit_question_gets_imperial_units(self):
        reply = MockWeatherResponder(seed=1).respond(QUESTION.replace("°C", "°F"))

        assert "°F" in reply.text
        assert "mph" in reply.text

    def test_same_seed_same_reply(self):
        assert (
            MockWeatherResponder(seed=7).respond(QUESTION).text
            == MockWeatherResponder(seed=7).respond(QUESTION).text
        )

    def test_city_containing_on_is_kept_whole(self):
        question = (
            "What's the weather forecast for Stratford on Avon, United Kingdom; "
            "Paris, France on Monday, October 19, 2026? Please provide the temperature in °C."
        )

        reply = MockWeatherResponder(seed=2).respond(question)

        assert reply.text.startswith(
            "Weather forecast for Stratford on Avon, United Kingdom; Paris, France "
            "on Monday, October 19, 2026:"
        )

    def test_unrecognized_question(self):
        reply = MockWeatherResponder().respond("hello?")

        assert "your location" in reply.text


class TestWeatherChatService:
    @pytest.mark.asyncio
    async def test_successful_exchange_is_remembered(self):
        provider = MagicMock()
        provider.send = AsyncMock(
            return_value=ChatReply(text="Sunny, 21°C", usage=TokenUsage(total_tokens=42))
        )
        service = WeatherChatService(provider)

        reply = await service.send_message(QUESTION)

        assert reply.text == "Sunny, 21°C"
        provider.send.assert_awaited_once_with(QUESTION, [])
        history = service.get_conversation_history()
        assert [(turn.role, turn.text) for turn in history] == [
            ("user", QUESTION),
            ("model", "Sunny, 21°C"),
        ]

    @pytest.mark.asyncio
    async def test_history_is_sent_with_later_messages(self):
        provider = MagicMock()
        provider.send = AsyncMock(return_value=ChatReply(text="ok"))
        service = WeatherChatService(provider)

        await service.send_message("first")
        await service.send_message("second")

        _, history = provider.send.await_args.args
        assert [turn.text for turn in history] == ["first", "ok"]

    @pytest.mark.asyncio
    async def test_provider_failure_falls_back_to_mock(self):
        provider = MagicMock()
        provider.send = AsyncMock(side_effect=GeminiConfigurationError("no key"))
        service = WeatherChatService(provider, fallback=MockWeatherResponder(seed=3))

        reply = await service.send_message(QUESTION)

        assert reply.is_fallback
        assert "Paris, France" in reply.text
        assert service.get_conversation_history() == []

    @pytest.mark.asyncio
    async def test_clear_history(self):
        provider = MagicMock()
        provider.send = AsyncMock(return_value=ChatReply(text="ok"))
        service = WeatherChatService(provider)
        await service.send_message("hi")

        service.clear_history()

        assert service.get_conversation_history() == []


def _gemini_response(text):
    return SimpleNamespace(
        text=text,
        usage_metadata=SimpleNamespace(
            prompt_token_count=10, candidates_token_count=5, total_token_count=15
        ),
    )


class TestGeminiChatProvider:
    @pytest.mark.asyncio
    async def test_missing_key(self):
        provider = GeminiChatProvider(settings=GeminiSettings(api_key=None))

        with pytest.raises(GeminiConfigurationError):
            await provider.send("hi")

    @pytest.mark.asyncio
    async def test_send_includes_history_and_usage(self):
        with patch("weather_form.ai.gemini.provider.genai.Client") as client_cls:
            generate = AsyncMock(return_value=_gemini_response("Cloudy"))
            client_cls.return_value.aio.models.generate_content = generate
            provider = GeminiChatProvider(
                settings=GeminiSettings(api_key="test_key", model_name="gemini-test")
            )

            reply = await provider.send(
                "and tomorrow?",
                [
                    ConversationMessage.from_text("user", "weather today?"),
                    ConversationMessage.from_text("model", "Sunny"),
                ],
            )

        assert reply.text == "Cloudy"
        assert reply.usage == TokenUsage(
            prompt_tokens=10, completion_tokens=5, total_tokens=15
        )
        client_cls.assert_called_once_with(api_key="test_key")
        kwargs = generate.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert [content.role for content in kwargs["contents"]] == ["user", "model", "user"]
        assert kwargs["contents"][-1].parts[0].text == "and tomorrow?"

    @pytest.mark.asyncio
    async def test_empty_reply(self):
        with patch("weather_form.ai.gemini.provider.genai.Client") as client_cls:
            client_cls.return_value.aio.models.generate_content = AsyncMock(
                return_value=_gemini_response("")
            )
            provider = GeminiChatProvider(settings=GeminiSettings(api_key="test_key"))

            with pytest.raises(GeminiContentGenerationError):
                await provider.send("hi")

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped(self):
        with patch("weather_form.ai.gemini.provider.genai.Client") as client_cls:
            client_cls.return_value.aio.models.generate_content = AsyncMock(
                side_effect=RuntimeError("socket closed")
            )
            provider = GeminiChatProvider(settings=GeminiSettings(api_key="test_key"))

            with pytest.raises(GeminiAPIError, match="socket closed"):
                await provider.send("hi")
