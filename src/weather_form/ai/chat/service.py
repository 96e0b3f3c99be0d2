"""
Weather chat service.

Wraps a chat provider with conversation history and a local fallback: a
provider failure is logged and answered by ``MockWeatherResponder`` rather
than surfaced to the user.
"""

from weather_form.ai.base import ChatProvider, ChatReply, ConversationMessage
from weather_form.ai.chat.mock import MockWeatherResponder
from weather_form.utils.logger import logger


class WeatherChatService:
    """Sends weather questions to the assistant, remembering prior turns."""

    def __init__(
        self,
        provider: ChatProvider,
        fallback: MockWeatherResponder | None = None,
    ) -> None:
        self.provider = provider
        self.fallback = fallback or MockWeatherResponder()
        self._conversation_history: list[ConversationMessage] = []

    async def send_message(self, message: str) -> ChatReply:
        """Ask the assistant and return its reply, or a mock reply on failure.

        Only successful exchanges are added to the history.
        """
        try:
            reply = await self.provider.send(message, self.get_conversation_history())
        except Exception as e:
            logger.warning("Chat provider failed, using mock reply", error=str(e))
            return self.fallback.respond(message)

        self._conversation_history.append(ConversationMessage.from_text("user", message))
        self._conversation_history.append(ConversationMessage.from_text("model", reply.text))
        logger.info(
            "Chat reply received",
            history_length=len(self._conversation_history),
            total_tokens=reply.usage.total_tokens if reply.usage else None,
        )
        return reply

    def clear_history(self) -> None:
        self._conversation_history = []

    def get_conversation_history(self) -> list[ConversationMessage]:
        return list(self._conversation_history)
