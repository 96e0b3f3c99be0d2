"""
Validation error taxonomy.

Validation errors are plain data attached to a field path; nothing here is
ever raised.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of validation error a field or list can carry."""

    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    CITY_NOT_FOUND = "city_not_found"
    CITY_COUNTRY_MISMATCH = "city_country_mismatch"
    DUPLICATE_LOCATION = "duplicate_location"
    EMPTY_ARRAY = "empty_array"
    TOO_MANY = "too_many"
    PAST_DATE = "past_date"
    FAR_FUTURE = "far_future"
    INVALID_DATE = "invalid_date"
    INVALID_UNIT = "invalid_unit"


ASYNC_ERROR_MESSAGES = {
    ErrorKind.CITY_NOT_FOUND: "City not found",
    ErrorKind.CITY_COUNTRY_MISMATCH: "City does not exist in the selected country",
}


@dataclass(frozen=True)
class FieldError:
    """A validation error attached to one path of the form."""

    kind: ErrorKind
    message: str
    path: str


class FieldPath:
    """Builders for the paths errors are attached to."""

    DATE = "date"
    TEMPERATURE_UNIT = "temperatureUnit"
    LOCATIONS = "locations"

    @staticmethod
    def city(index: int) -> str:
        return f"locations.{index}.city"

    @staticmethod
    def country(index: int) -> str:
        return f"locations.{index}.country"
