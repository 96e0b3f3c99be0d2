"""Custom exception classes for the weather lookup client."""

from typing import Any


class WeatherLookupError(Exception):
    """Base exception for all weather lookup errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any | None = None,
    ) -> None:
        """Initialize WeatherLookupError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            response_data: Response body returned by the provider, if any
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data

    def __str__(self) -> str:
        if self.status_code:
            return f"Weather lookup error ({self.status_code}): {self.message}"
        return f"Weather lookup error: {self.message}"


class WeatherLookupConfigurationError(WeatherLookupError):
    """Raised before any request when no API key is configured."""

    def __init__(self, message: str = "Weather lookup API key is not configured") -> None:
        super().__init__(message=message)


class WeatherLookupAuthenticationError(WeatherLookupError):
    """Exception raised when the provider rejects the API key (401/403)."""

    def __init__(
        self,
        message: str = "Invalid API key or authentication failed",
        status_code: int = 401,
        response_data: Any | None = None,
    ) -> None:
        super().__init__(
            message=message, status_code=status_code, response_data=response_data
        )


class WeatherLookupBadRequestError(WeatherLookupError):
    """Exception raised for bad request errors (400)."""

    def __init__(
        self,
        message: str = "Bad request - malformed or missing query",
        response_data: Any | None = None,
    ) -> None:
        super().__init__(message=message, status_code=400, response_data=response_data)


class WeatherLookupRateLimitError(WeatherLookupError):
    """Exception raised for rate limit errors (429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        response_data: Any | None = None,
    ) -> None:
        super().__init__(message=message, status_code=429, response_data=response_data)


class WeatherLookupServerError(WeatherLookupError):
    """Exception raised for server errors (5xx)."""

    def __init__(
        self,
        message: str = "Weather provider server error",
        status_code: int = 500,
        response_data: Any | None = None,
    ) -> None:
        super().__init__(
            message=message, status_code=status_code, response_data=response_data
        )


class WeatherLookupTimeoutError(WeatherLookupError):
    """Exception raised when the lookup exceeds the configured timeout."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_duration: float | None = None,
    ) -> None:
        super().__init__(message=message)
        self.timeout_duration = timeout_duration


class WeatherLookupConnectionError(WeatherLookupError):
    """Exception raised for connection and other transport errors."""

    def __init__(
        self,
        message: str = "Failed to connect to the weather provider",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message)
        self.original_error = original_error
