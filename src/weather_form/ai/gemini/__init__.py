"""Gemini chat provider."""

from .exceptions import GeminiConfigurationError, GeminiError
from .provider import GeminiChatProvider

__all__ = ["GeminiChatProvider", "GeminiConfigurationError", "GeminiError"]
