"""Normalized (city, country) identity used for caching and staleness checks."""

from dataclasses import dataclass

MIN_LOOKUP_LENGTH = 2


def normalize(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class ValidationKey:
    """Lowercased, trimmed (city, country) pair.

    Two entries with equal keys are duplicates, and a key is looked up over
    the network at most once per process.
    """

    city: str
    country: str

    @classmethod
    def from_location(cls, city: str, country: str) -> "ValidationKey":
        return cls(city=normalize(city), country=normalize(country))

    @classmethod
    def candidate(cls, city: str, country: str) -> "ValidationKey | None":
        """Key for a lookup, or None while either part is too short to check."""
        key = cls.from_location(city, country)
        if len(key.city) < MIN_LOOKUP_LENGTH or len(key.country) < MIN_LOOKUP_LENGTH:
            return None
        return key

    def matches(self, name: str, country: str) -> bool:
        """True if a provider record names exactly this location."""
        return self == ValidationKey.from_location(name, country)

    def __str__(self) -> str:
        return f"{self.city},{self.country}"
