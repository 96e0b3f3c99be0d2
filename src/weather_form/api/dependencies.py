"""
FastAPI dependencies for the HTTP backend.
"""

from weather_form.ai.base import ChatProvider
from weather_form.ai.gemini.provider import GeminiChatProvider
from weather_form.utils.logger import logger

_chat_provider: ChatProvider | None = None


def get_chat_provider() -> ChatProvider:
    """
    Get or create the chat provider singleton.

    Returns:
        ChatProvider: The Gemini chat provider
    """
    global _chat_provider
    if _chat_provider is None:
        _chat_provider = GeminiChatProvider()
        logger.info("Initialized GeminiChatProvider")
    return _chat_provider
