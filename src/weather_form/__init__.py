"""Multi-location weather query form with asynchronous location validation."""

__version__ = "0.1.0"
