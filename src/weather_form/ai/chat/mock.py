"""
Locally synthesized weather replies.

Used when the chat provider cannot answer, so the user always gets a
readable response instead of an error.
"""

import random
import re

from weather_form.ai.base import ChatReply

CONDITIONS = [
    "sunny",
    "partly cloudy",
    "overcast",
    "light rain",
    "scattered showers",
    "windy",
]
CELSIUS_RANGE = (-5, 32)
HUMIDITY_RANGE = (30, 90)
WIND_RANGE_KMH = (5, 35)

_LOCATION_PATTERN = re.compile(r"forecast for (?P<location>[^?]+) on (?P<date>[^?]+)\?")


class MockWeatherResponder:
    """Produces templated weather answers from a small fixed vocabulary."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def respond(self, message: str) -> ChatReply:
        match = _LOCATION_PATTERN.search(message)
        location = match.group("location") if match else "your location"
        when = match.group("date") if match else "the requested day"
        fahrenheit = "°F" in message

        celsius = self._random.randint(*CELSIUS_RANGE)
        temperature = round(celsius * 9 / 5 + 32) if fahrenheit else celsius
        unit = "°F" if fahrenheit else "°C"
        condition = self._random.choice(CONDITIONS)
        humidity = self._random.randint(*HUMIDITY_RANGE)
        wind_kmh = self._random.randint(*WIND_RANGE_KMH)
        wind = f"{round(wind_kmh / 1.609)} mph" if fahrenheit else f"{wind_kmh} km/h"

        text = (
            f"Weather forecast for {location} on {when}:\n"
            f"- Temperature: {temperature}{unit}\n"
            f"- Conditions: {condition}\n"
            f"- Humidity: {humidity}%\n"
            f"- Wind: {wind}\n\n"
            "Note: live forecast data is unavailable right now, this is an estimate."
        )
        return ChatReply(text=text, is_fallback=True)
