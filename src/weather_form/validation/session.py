"""
Async existence-check lifecycle of a single location entry.

Every edit of the entry's city or country goes through ``update``. The
session works out the ValidationKey the edit implies and, when it differs
from the key already being checked, supersedes the running check and
dispatches a new one. Each dispatch is tagged with a generation number; a
completion whose generation is no longer current is dropped, so only the
most recently dispatched check can ever change the entry's status.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from weather_form.utils.logger import logger
from weather_form.validation.checker import ExistenceChecker, LookupOutcome
from weather_form.validation.errors import ErrorKind
from weather_form.validation.keys import ValidationKey


class EntryState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class EntryValidationStatus:
    """Async validation status of one entry."""

    state: EntryState
    reason: ErrorKind | None = None

    @classmethod
    def idle(cls) -> "EntryValidationStatus":
        return cls(EntryState.IDLE)

    @classmethod
    def pending(cls) -> "EntryValidationStatus":
        return cls(EntryState.PENDING)

    @classmethod
    def valid(cls) -> "EntryValidationStatus":
        return cls(EntryState.VALID)

    @classmethod
    def invalid(cls, reason: ErrorKind) -> "EntryValidationStatus":
        return cls(EntryState.INVALID, reason)

    @property
    def is_valid(self) -> bool:
        return self.state is EntryState.VALID

    @property
    def is_settled(self) -> bool:
        return self.state in (EntryState.VALID, EntryState.INVALID)


def evaluate_outcome(outcome: LookupOutcome, key: ValidationKey) -> EntryValidationStatus:
    """Map a lookup outcome onto the entry status it implies."""
    if not outcome.ok or not outcome.matches:
        return EntryValidationStatus.invalid(ErrorKind.CITY_NOT_FOUND)
    if any(key.matches(match.name, match.country) for match in outcome.matches):
        return EntryValidationStatus.valid()
    return EntryValidationStatus.invalid(ErrorKind.CITY_COUNTRY_MISMATCH)


class EntryValidationSession:
    """Owns the in-flight existence check of one entry."""

    def __init__(
        self,
        checker: ExistenceChecker,
        on_status_change: Callable[["EntryValidationSession"], None] | None = None,
    ) -> None:
        self.checker = checker
        self.on_status_change = on_status_change
        self.status = EntryValidationStatus.idle()
        self.key: ValidationKey | None = None
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_pending(self) -> bool:
        return self.status.state is EntryState.PENDING

    def update(self, city: str, country: str) -> None:
        """React to an edit of the entry's city or country.

        Must be called from inside a running event loop.
        """
        candidate = ValidationKey.candidate(city, country)

        if candidate is None:
            if self.key is not None or self.status.state is not EntryState.IDLE:
                self._supersede()
                self.key = None
                self._set_status(EntryValidationStatus.idle())
            return

        if candidate == self.key:
            return

        self._supersede()
        self.key = candidate
        self._set_status(EntryValidationStatus.pending())
        self._task = asyncio.create_task(
            self._run(self._generation, candidate, city, country)
        )

    async def wait_settled(self) -> None:
        """Wait until the current check, if any, has been applied."""
        while self._task is not None and not self._task.done():
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if task is self._task or not task.cancelled():
                    raise

    def dispose(self) -> None:
        """Abandon the running check; its result will never be applied."""
        self._supersede()
        self.on_status_change = None

    def _supersede(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(
        self, generation: int, key: ValidationKey, city: str, country: str
    ) -> None:
        outcome = await self.checker.check(city, country)

        if generation != self._generation:
            logger.debug(
                "Discarding stale check result",
                key=str(key),
                generation=generation,
                current_generation=self._generation,
            )
            return

        self._set_status(evaluate_outcome(outcome, key))

    def _set_status(self, status: EntryValidationStatus) -> None:
        if status == self.status:
            return
        self.status = status
        if self.on_status_change is not None:
            self.on_status_change(self)
