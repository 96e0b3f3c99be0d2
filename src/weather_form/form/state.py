"""
Mutable form record read by validation and by the submit action.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class TemperatureUnit(str, Enum):
    """Temperature units the assistant can answer in."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "°C" if self is TemperatureUnit.CELSIUS else "°F"


def _today_iso() -> str:
    return date.today().isoformat()


class LocationEntry(BaseModel):
    """One (city, country) row of the form. Identity is its list position."""

    city: str = ""
    country: str = ""


class FormState(BaseModel):
    """Source of truth for the weather query form.

    The temperature unit is kept as the raw string the user picked so that
    an unsupported value can be reported by validation instead of rejected
    on assignment.
    """

    model_config = {"validate_assignment": True}

    date: str = Field(default_factory=_today_iso, description="ISO date (YYYY-MM-DD)")
    locations: list[LocationEntry] = Field(
        default_factory=lambda: [LocationEntry()],
        description="Locations to ask about, in display order",
    )
    temperature_unit: str = Field(default=TemperatureUnit.CELSIUS.value)

    def snapshot(self) -> "FormState":
        """Deep copy that later edits cannot change."""
        return self.model_copy(deep=True)

    def clear(self) -> None:
        """Reset every field to its default."""
        defaults = FormState()
        self.date = defaults.date
        self.locations = defaults.locations
        self.temperature_unit = defaults.temperature_unit
