from .mock import MockWeatherResponder
from .service import WeatherChatService

__all__ = ["MockWeatherResponder", "WeatherChatService"]
