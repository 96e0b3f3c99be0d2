"""Shared fixtures for the weather form tests."""

import asyncio
from datetime import date

import pytest

from weather_form.form.state import FormState
from weather_form.integrations.weather_lookup.schemas import LocationMatch
from weather_form.validation.cache import ResultCache
from weather_form.validation.checker import ExistenceChecker
from weather_form.validation.coordinator import ListValidationCoordinator

TODAY = date(2026, 10, 19)


def match(name: str, country: str, region: str = "") -> LocationMatch:
    return LocationMatch(name=name, country=country, region=region)


class FakeLocationSearcher:
    """In-memory stand-in for WeatherLookupClient.

    Results are keyed by the lowercased (city, country) the search receives.
    ``hold`` makes searches for a key block until the returned event is set,
    which lets tests control the order in which lookups complete.
    """

    def __init__(self, results: dict | None = None) -> None:
        self.results: dict[tuple[str, str], list[LocationMatch] | Exception] = dict(
            results or {}
        )
        self.calls: list[tuple[str, str]] = []
        self._gates: dict[tuple[str, str], asyncio.Event] = {}
        self.closed = False

    def hold(self, city: str, country: str) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[(city.lower(), country.lower())] = gate
        return gate

    async def search(self, city: str, country: str) -> list[LocationMatch]:
        key = (city.lower(), country.lower())
        self.calls.append(key)
        gate = self._gates.get(key)
        if gate is not None:
            await gate.wait()
        result = self.results.get(key, [])
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


async def drain(iterations: int = 20) -> None:
    """Let every ready task run until the loop is idle."""
    for _ in range(iterations):
        await asyncio.sleep(0)


@pytest.fixture
def searcher():
    return FakeLocationSearcher(
        {
            ("paris", "france"): [match("Paris", "France", "Ile-de-France")],
            ("berlin", "germany"): [match("Berlin", "Germany", "Berlin")],
            ("london", "canada"): [
                match("London", "United Kingdom", "City of London, Greater London"),
                match("London", "Canada", "Ontario"),
            ],
            ("london", "france"): [
                match("London", "United Kingdom", "City of London, Greater London")
            ],
            ("rome", "italy"): [match("Rome", "Italy", "Lazio")],
        }
    )


@pytest.fixture
def cache():
    return ResultCache()


@pytest.fixture
def checker(searcher, cache):
    return ExistenceChecker(client=searcher, cache=cache, settle_delay=0)


@pytest.fixture
def coordinator(checker):
    return ListValidationCoordinator(
        checker=checker, form=FormState(date=TODAY.isoformat()), today=lambda: TODAY
    )
