"""
Remote existence check for one (city, country) pair.

``ExistenceChecker.check`` consults the shared ``ResultCache`` first. On a
miss it waits a fixed settle delay, standing in for keystroke debouncing,
and then asks the weather provider's location search.

Concurrent checks for the same key share one lookup: a caller that arrives
while a lookup for its key is still running awaits that lookup instead of
starting its own, so a key reaches the network at most once per process
(unless the first attempt failed, since failures are not cached).

A caller that is cancelled simply stops waiting. If all callers of a lookup
are gone before its settle delay has elapsed the lookup is dropped without
touching the network; once the request is on the wire it is allowed to
finish and its result still lands in the cache.
"""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Protocol

from weather_form.integrations.weather_lookup.exceptions import WeatherLookupError
from weather_form.integrations.weather_lookup.schemas import LocationMatch
from weather_form.utils.logger import logger
from weather_form.validation.cache import ResultCache
from weather_form.validation.keys import ValidationKey

DEFAULT_SETTLE_DELAY_SECONDS = 2.0
INCOMPLETE_LOCATION_ERROR = "City and country must both be at least 2 characters"


class LocationSearcher(Protocol):
    async def search(self, city: str, country: str) -> list[LocationMatch]: ...

    async def close(self) -> None: ...


@dataclass(frozen=True)
class LookupOutcome:
    """Terminal result of one check: candidate matches or an error."""

    matches: list[LocationMatch] = field(default_factory=list)
    error: str | None = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class _SharedLookup:
    def __init__(self) -> None:
        self.task: asyncio.Task[LookupOutcome] | None = None
        self.waiters = 0
        self.dispatched = False


class ExistenceChecker:
    """Cache-first, joinable existence lookups."""

    def __init__(
        self,
        client: LocationSearcher,
        cache: ResultCache,
        settle_delay: float = DEFAULT_SETTLE_DELAY_SECONDS,
    ) -> None:
        self.client = client
        self.cache = cache
        self.settle_delay = settle_delay
        self._in_flight: dict[ValidationKey, _SharedLookup] = {}

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    async def __aenter__(self) -> "ExistenceChecker":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Cancel lookups still waiting out their settle delay and close the client."""
        for key, lookup in list(self._in_flight.items()):
            if not lookup.dispatched:
                self._forget(key, lookup)
                lookup.task.cancel()
        await self.client.close()

    async def check(self, city: str, country: str) -> LookupOutcome:
        """Check whether a city/country pair exists.

        Args:
            city: City as entered
            country: Country as entered

        Returns:
            LookupOutcome with the provider's matches, or with an error when
            the input is incomplete or the lookup failed
        """
        key = ValidationKey.candidate(city, country)
        if key is None:
            return LookupOutcome(error=INCOMPLETE_LOCATION_ERROR)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Location served from cache", key=str(key))
            return LookupOutcome(matches=cached, from_cache=True)

        lookup = self._in_flight.get(key)
        if lookup is None:
            lookup = self._start(key, city, country)
        else:
            logger.debug("Joining in-flight lookup", key=str(key))

        lookup.waiters += 1
        try:
            outcome = await asyncio.shield(lookup.task)
            # joined callers each get their own list
            return replace(outcome, matches=list(outcome.matches))
        finally:
            lookup.waiters -= 1
            if lookup.waiters == 0 and not lookup.dispatched and not lookup.task.done():
                logger.debug("Dropping lookup nobody waits for", key=str(key))
                self._forget(key, lookup)
                lookup.task.cancel()

    def _start(self, key: ValidationKey, city: str, country: str) -> _SharedLookup:
        lookup = _SharedLookup()
        lookup.task = asyncio.create_task(self._lookup(lookup, key, city, country))
        lookup.task.add_done_callback(lambda _: self._forget(key, lookup))
        self._in_flight[key] = lookup
        return lookup

    def _forget(self, key: ValidationKey, lookup: _SharedLookup) -> None:
        if self._in_flight.get(key) is lookup:
            del self._in_flight[key]

    async def _lookup(
        self, lookup: _SharedLookup, key: ValidationKey, city: str, country: str
    ) -> LookupOutcome:
        if self.settle_delay > 0:
            await asyncio.sleep(self.settle_delay)

        lookup.dispatched = True
        try:
            matches = await self.client.search(city.strip(), country.strip())
        except WeatherLookupError as e:
            logger.warning("Location lookup failed", key=str(key), error=str(e))
            return LookupOutcome(error=str(e))
        except Exception as e:
            logger.exception("Unexpected location lookup failure", key=str(key))
            return LookupOutcome(error=f"Unexpected error: {e}")

        self.cache.put(key, matches)
        logger.info("Location lookup completed", key=str(key), match_count=len(matches))
        return LookupOutcome(matches=self.cache.get(key))
