"""Gemini chat provider implementation."""

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from weather_form.ai.base import ChatProvider, ChatReply, ConversationMessage, TokenUsage
from weather_form.ai.gemini.config import GeminiSettings, get_gemini_settings
from weather_form.ai.gemini.exceptions import (
    GeminiAPIError,
    GeminiAuthenticationError,
    GeminiBadRequestError,
    GeminiConfigurationError,
    GeminiContentGenerationError,
    GeminiError,
    GeminiRateLimitError,
    GeminiServerError,
)
from weather_form.utils.logger import logger


def _to_gemini_error(error: genai_errors.APIError) -> GeminiError:
    code = getattr(error, "code", None)
    message = f"Gemini request failed: {error}"
    if code in (401, 403):
        return GeminiAuthenticationError(message, status_code=code)
    if code == 429:
        return GeminiRateLimitError(message, status_code=code)
    if code == 400:
        return GeminiBadRequestError(message, status_code=code)
    if isinstance(error, genai_errors.ServerError):
        return GeminiServerError(message, status_code=code)
    return GeminiAPIError(message, status_code=code)


class GeminiChatProvider(ChatProvider):
    """Chat provider backed by Google's Gemini API.

    A message without history is sent as a single user turn; with history,
    the prior turns are sent first so the model answers in context.
    """

    def __init__(self, settings: GeminiSettings | None = None) -> None:
        self.settings = settings or get_gemini_settings()
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            if not self.settings.api_key:
                raise GeminiConfigurationError("Gemini API key is not configured")
            try:
                self._client = genai.Client(api_key=self.settings.api_key)
                logger.info("Gemini client initialized")
            except Exception as e:
                logger.error("Failed to initialize Gemini client", error=str(e))
                raise GeminiError(f"Failed to authenticate: {e}") from e
        return self._client

    def _build_contents(
        self, message: str, history: list[ConversationMessage] | None
    ) -> list[types.Content]:
        contents = [
            types.Content(
                role=turn.role, parts=[types.Part(text=part.text) for part in turn.parts]
            )
            for turn in history or []
        ]
        contents.append(types.Content(role="user", parts=[types.Part(text=message)]))
        return contents

    async def send(
        self, message: str, history: list[ConversationMessage] | None = None
    ) -> ChatReply:
        """Generate the assistant's reply to ``message``.

        Args:
            message: The user's message
            history: Prior turns, oldest first

        Returns:
            ChatReply: Generated text with token usage

        Raises:
            GeminiError: If the key is missing or generation fails
        """
        client = self._get_client()
        config = types.GenerateContentConfig(
            temperature=self.settings.temperature,
            top_p=self.settings.top_p,
            max_output_tokens=self.settings.max_output_tokens,
        )

        logger.info(
            "Generating chat reply",
            model_name=self.settings.model_name,
            history_length=len(history or []),
        )
        try:
            response = await client.aio.models.generate_content(
                model=self.settings.model_name,
                contents=self._build_contents(message, history),
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error("Chat generation failed", error=str(e))
            raise _to_gemini_error(e) from e
        except Exception as e:
            logger.error("Chat generation failed", error=str(e))
            raise GeminiAPIError(f"Chat generation failed: {e}") from e

        if not response.text:
            raise GeminiContentGenerationError("Gemini returned an empty reply")

        usage = None
        metadata = getattr(response, "usage_metadata", None)
        if metadata is not None:
            usage = TokenUsage(
                prompt_tokens=metadata.prompt_token_count,
                completion_tokens=metadata.candidates_token_count,
                total_tokens=metadata.total_token_count,
            )

        return ChatReply(text=response.text, usage=usage)
