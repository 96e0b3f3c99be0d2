"""Natural-language weather question built from the form."""

from datetime import date

from weather_form.form.state import FormState, LocationEntry, TemperatureUnit


def format_query_date(value: str) -> str:
    """``2026-10-19`` -> ``Monday, October 19, 2026``; other text is kept as is."""
    try:
        day = date.fromisoformat(value.strip())
    except ValueError:
        return value
    return f"{day:%A, %B} {day.day}, {day.year}"


def format_locations(locations: list[LocationEntry]) -> str:
    names = [f"{entry.city.strip()}, {entry.country.strip()}" for entry in locations]
    if len(names) <= 1:
        return "".join(names)
    # "; " because every name already contains a comma
    return "; ".join(names[:-1]) + " and " + names[-1]


def build_weather_query(form: FormState) -> str:
    unit = TemperatureUnit(form.temperature_unit)
    return (
        f"What's the weather forecast for {format_locations(form.locations)} "
        f"on {format_query_date(form.date)}? "
        f"Please provide the temperature in {unit.symbol}."
    )
