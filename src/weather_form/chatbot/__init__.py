from .chatbot import TranscriptMessage, WeatherChatbot
from .query import build_weather_query

__all__ = ["TranscriptMessage", "WeatherChatbot", "build_weather_query"]
