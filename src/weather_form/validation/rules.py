"""
Synchronous field rules.

Each field gets a list of tagged ``Rule`` objects. A rule is a pure
predicate over the field value; ``run_rules`` applies a list in order and
collects one ``FieldError`` per failing rule.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

from weather_form.form.state import TemperatureUnit
from weather_form.validation.errors import ErrorKind, FieldError

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
FORECAST_HORIZON_DAYS = 14


@dataclass(frozen=True)
class Rule:
    """A tagged predicate: ``check(value)`` is True when the value passes."""

    kind: ErrorKind
    message: str
    check: Callable[[str], bool]


def run_rules(rules: list[Rule], value: str, path: str) -> list[FieldError]:
    return [
        FieldError(kind=rule.kind, message=rule.message, path=path)
        for rule in rules
        if not rule.check(value)
    ]


def required(message: str) -> Rule:
    return Rule(ErrorKind.REQUIRED, message, lambda value: bool(value and value.strip()))


def min_length(length: int, message: str) -> Rule:
    # empty values are left to the required rule
    return Rule(ErrorKind.TOO_SHORT, message, lambda value: not value or len(value) >= length)


def max_length(length: int, message: str) -> Rule:
    return Rule(ErrorKind.TOO_LONG, message, lambda value: not value or len(value) <= length)


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def _not_in_past(today: Callable[[], date]) -> Callable[[str], bool]:
    def check(value: str) -> bool:
        selected = _parse_date(value)
        return selected is None or selected >= today()

    return check


def _within_horizon(today: Callable[[], date]) -> Callable[[str], bool]:
    def check(value: str) -> bool:
        selected = _parse_date(value)
        return selected is None or selected <= today() + timedelta(days=FORECAST_HORIZON_DAYS)

    return check


CITY_RULES: list[Rule] = [
    required("City is required"),
    min_length(MIN_NAME_LENGTH, "City must be at least 2 characters"),
    max_length(MAX_NAME_LENGTH, "City name is too long"),
]

COUNTRY_RULES: list[Rule] = [
    required("Country is required"),
    min_length(MIN_NAME_LENGTH, "Country must be at least 2 characters"),
    max_length(MAX_NAME_LENGTH, "Country name is too long"),
]

TEMPERATURE_UNIT_RULES: list[Rule] = [
    required("Temperature unit is required"),
    Rule(
        ErrorKind.INVALID_UNIT,
        "Temperature unit must be celsius or fahrenheit",
        lambda value: not value or value in {unit.value for unit in TemperatureUnit},
    ),
]


def date_rules(today: Callable[[], date] = date.today) -> list[Rule]:
    """Rules for the forecast date, relative to the given clock."""
    return [
        required("Date is required"),
        Rule(
            ErrorKind.INVALID_DATE,
            "Date must be in YYYY-MM-DD format",
            lambda value: not value or _parse_date(value) is not None,
        ),
        Rule(ErrorKind.PAST_DATE, "Date cannot be in the past", _not_in_past(today)),
        Rule(
            ErrorKind.FAR_FUTURE,
            "Weather forecasts only available for the next 14 days",
            _within_horizon(today),
        ),
    ]
