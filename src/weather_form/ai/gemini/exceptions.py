"""Custom exceptions for the Gemini integration package."""


class GeminiError(Exception):
    """Base exception for all Gemini-related errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GeminiConfigurationError(GeminiError):
    """Raised when no API key is configured."""


class GeminiAPIError(GeminiError):
    """Raised when Gemini API returns an error."""


class GeminiAuthenticationError(GeminiError):
    """Raised when authentication with Gemini API fails."""


class GeminiRateLimitError(GeminiError):
    """Raised when Gemini API rate limit is exceeded."""


class GeminiServerError(GeminiError):
    """Raised when Gemini API returns a server error."""


class GeminiBadRequestError(GeminiError):
    """Raised when a bad request is made to Gemini API."""


class GeminiContentGenerationError(GeminiError):
    """Raised when content generation returns no usable text."""
