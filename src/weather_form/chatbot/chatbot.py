"""
Weather chatbot: the form's submit action plus the chat transcript.
"""

import random
import string
import time
from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from weather_form.ai.chat.service import WeatherChatService
from weather_form.chatbot.query import build_weather_query
from weather_form.utils.logger import logger
from weather_form.validation.coordinator import ListValidationCoordinator

ERROR_REPLY = (
    "Sorry, I encountered an error while fetching the weather data. Please try again."
)
_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_message_id() -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"msg-{int(time.time() * 1000)}-{suffix}"


class TranscriptMessage(BaseModel):
    """One message shown in the chat transcript."""

    id: str = Field(default_factory=generate_message_id)
    content: str
    role: Literal["user", "assistant"]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_loading: bool = False
    is_fallback: bool = False


class WeatherChatbot:
    """Submits the validated form as a question and keeps the transcript."""

    def __init__(
        self, coordinator: ListValidationCoordinator, chat_service: WeatherChatService
    ) -> None:
        self.coordinator = coordinator
        self.chat_service = chat_service
        self.is_submitting = False
        self._messages: list[TranscriptMessage] = []

    @property
    def messages(self) -> list[TranscriptMessage]:
        return list(self._messages)

    @property
    def message_count(self) -> int:
        return len(self._messages)

    async def submit_weather_query(self) -> bool:
        """Send the form as a weather question.

        Returns:
            False without sending anything when the form is not valid (every
            field is then marked as touched so its errors show) or a
            submission is already running; True once the reply is in.
        """
        if self.is_submitting:
            logger.info("Submit ignored, a query is already in flight")
            return False

        if not self.coordinator.is_valid:
            self.coordinator.mark_all_touched()
            logger.info(
                "Submit blocked by validation",
                error_count=len(self.coordinator.errors()),
                pending=self.coordinator.is_pending,
            )
            return False

        query = build_weather_query(self.coordinator.form.snapshot())
        self._messages.append(TranscriptMessage(content=query, role="user"))
        await self._send_to_assistant(query)
        return True

    async def _send_to_assistant(self, query: str) -> None:
        self.is_submitting = True
        loading = TranscriptMessage(content="", role="assistant", is_loading=True)
        self._messages.append(loading)

        try:
            reply = await self.chat_service.send_message(query)
            self._replace(
                loading.id,
                content=reply.text,
                is_loading=False,
                is_fallback=reply.is_fallback,
            )
        except Exception as e:
            logger.error("Failed to get assistant reply", error=str(e))
            self._replace(loading.id, content=ERROR_REPLY, is_loading=False)
        finally:
            self.is_submitting = False

    def _replace(self, message_id: str, **changes) -> None:
        self._messages = [
            message.model_copy(update=changes) if message.id == message_id else message
            for message in self._messages
        ]

    def clear_conversation(self) -> None:
        """Empty the transcript and the assistant's memory of it."""
        self._messages = []
        self.chat_service.clear_history()
