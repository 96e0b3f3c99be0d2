from .state import FormState, LocationEntry, TemperatureUnit

__all__ = ["FormState", "LocationEntry", "TemperatureUnit"]
