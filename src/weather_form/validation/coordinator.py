"""
List-aware validation of the weather query form.

``ListValidationCoordinator`` is the single entry point for edits. It writes
the ``FormState``, keeps one ``EntryValidationSession`` per location (by
position, so sessions move with their entries on insert and remove) and
derives every error from the current state on demand:

- list cardinality (``empty_array``, ``too_many``)
- per-entry synchronous rules
- per-entry existence checks, once settled invalid
- duplicate locations across entries
- date and temperature unit rules
"""

import asyncio
from collections.abc import Callable
from datetime import date

from weather_form.form.state import FormState, LocationEntry
from weather_form.utils.logger import logger
from weather_form.validation.checker import ExistenceChecker
from weather_form.validation.errors import (
    ASYNC_ERROR_MESSAGES,
    ErrorKind,
    FieldError,
    FieldPath,
)
from weather_form.validation.keys import ValidationKey
from weather_form.validation.rules import (
    CITY_RULES,
    COUNTRY_RULES,
    TEMPERATURE_UNIT_RULES,
    date_rules,
    run_rules,
)
from weather_form.validation.session import (
    EntryState,
    EntryValidationSession,
    EntryValidationStatus,
)

DEFAULT_MAX_LOCATIONS = 5

Listener = Callable[["ListValidationCoordinator"], None]


def find_duplicates(locations: list[LocationEntry]) -> dict[int, int]:
    """Map each duplicated entry to the index of its next repeat.

    Entry ``i`` is reported when some later entry ``j`` has the same
    ValidationKey, so in every group of equal locations all but the last
    occurrence are reported. Entries with a blank city or country are
    ignored.
    """
    duplicates: dict[int, int] = {}
    keys = [ValidationKey.from_location(entry.city, entry.country) for entry in locations]
    for i, key in enumerate(keys):
        if not key.city or not key.country:
            continue
        for j in range(i + 1, len(keys)):
            if keys[j] == key:
                duplicates[i] = j
                break
    return duplicates


class ListValidationCoordinator:
    """Validation engine for the multi-location weather form."""

    def __init__(
        self,
        checker: ExistenceChecker,
        form: FormState | None = None,
        max_locations: int | None = DEFAULT_MAX_LOCATIONS,
        today: Callable[[], date] = date.today,
    ) -> None:
        """
        Args:
            checker: Existence checker shared by every entry
            form: Form to validate; a fresh default form when omitted
            max_locations: Upper bound on the list length, or None for no bound
            today: Clock used by the date rules
        """
        self.checker = checker
        self.form = form if form is not None else FormState()
        self.max_locations = max_locations
        self._date_rules = date_rules(today)
        self._listeners: list[Listener] = []
        self._touched: set[str] = set()
        self._sessions: list[EntryValidationSession] = []
        for entry in self.form.locations:
            session = self._new_session()
            session.update(entry.city, entry.country)
            self._sessions.append(session)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_city(self, index: int, value: str) -> None:
        entry = self.form.locations[index]
        entry.city = value
        self._sessions[index].update(entry.city, entry.country)
        self._notify()

    def set_country(self, index: int, value: str) -> None:
        entry = self.form.locations[index]
        entry.country = value
        self._sessions[index].update(entry.city, entry.country)
        self._notify()

    def set_date(self, value: str) -> None:
        self.form.date = value
        self._notify()

    def set_temperature_unit(self, value: str) -> None:
        self.form.temperature_unit = value
        self._notify()

    def add_entry(self) -> int:
        """Append an empty location and return its index."""
        self.form.locations.append(LocationEntry())
        self._sessions.append(self._new_session())
        logger.debug("Location added", count=len(self.form.locations))
        self._notify()
        return len(self.form.locations) - 1

    def remove_entry(self, index: int) -> None:
        """Delete the location at ``index``; later entries shift down by one.

        Negative indices count from the end, as for lists.
        """
        index = range(len(self.form.locations))[index]
        del self.form.locations[index]
        session = self._sessions.pop(index)
        session.dispose()
        self._shift_touched(index)
        logger.debug("Location removed", index=index, count=len(self.form.locations))
        self._notify()

    def clear(self) -> None:
        """Reset the form to its defaults and forget all interaction."""
        for session in self._sessions:
            session.dispose()
        self.form.clear()
        self._sessions = [self._new_session() for _ in self.form.locations]
        self._touched.clear()
        self._notify()

    # ------------------------------------------------------------------
    # Interaction tracking
    # ------------------------------------------------------------------

    def mark_touched(self, path: str) -> None:
        self._touched.add(path)

    def mark_all_touched(self) -> None:
        self._touched.update(self.field_paths())

    def is_touched(self, path: str) -> bool:
        return path in self._touched

    def field_paths(self) -> list[str]:
        paths = [FieldPath.DATE, FieldPath.LOCATIONS, FieldPath.TEMPERATURE_UNIT]
        for index in range(len(self.form.locations)):
            paths.append(FieldPath.city(index))
            paths.append(FieldPath.country(index))
        return paths

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def sessions(self) -> list[EntryValidationSession]:
        return list(self._sessions)

    def entry_status(self, index: int) -> EntryValidationStatus:
        return self._sessions[index].status

    def errors(self) -> list[FieldError]:
        """Every current validation error, in form order."""
        form = self.form
        errors = run_rules(self._date_rules, form.date, FieldPath.DATE)
        errors.extend(self.list_errors())
        for index in range(len(form.locations)):
            errors.extend(self.entry_errors(index))
        errors.extend(
            run_rules(TEMPERATURE_UNIT_RULES, form.temperature_unit, FieldPath.TEMPERATURE_UNIT)
        )
        return errors

    def list_errors(self) -> list[FieldError]:
        count = len(self.form.locations)
        if count == 0:
            return [
                FieldError(
                    ErrorKind.EMPTY_ARRAY,
                    "At least one location is required",
                    FieldPath.LOCATIONS,
                )
            ]
        if self.max_locations is not None and count > self.max_locations:
            return [
                FieldError(
                    ErrorKind.TOO_MANY,
                    f"Maximum {self.max_locations} locations allowed",
                    FieldPath.LOCATIONS,
                )
            ]
        return []

    def entry_errors(self, index: int) -> list[FieldError]:
        entry = self.form.locations[index]
        city_path = FieldPath.city(index)
        errors = run_rules(CITY_RULES, entry.city, city_path)
        errors.extend(run_rules(COUNTRY_RULES, entry.country, FieldPath.country(index)))

        status = self._sessions[index].status
        if status.state is EntryState.INVALID:
            errors.append(
                FieldError(status.reason, ASYNC_ERROR_MESSAGES[status.reason], city_path)
            )

        repeat = find_duplicates(self.form.locations).get(index)
        if repeat is not None:
            errors.append(
                FieldError(
                    ErrorKind.DUPLICATE_LOCATION,
                    f"Location is also listed at position {repeat + 1}",
                    city_path,
                )
            )
        return errors

    def errors_for(self, path: str) -> list[FieldError]:
        return [error for error in self.errors() if error.path == path]

    def visible_errors(self) -> list[FieldError]:
        """Errors of the fields the user has interacted with."""
        return [error for error in self.errors() if error.path in self._touched]

    @property
    def is_pending(self) -> bool:
        return any(session.is_pending for session in self._sessions)

    @property
    def is_valid(self) -> bool:
        """Aggregate validity: no error anywhere and every entry checked valid."""
        if self.errors():
            return False
        return all(session.status.is_valid for session in self._sessions)

    async def wait_until_settled(self) -> None:
        """Wait for every entry's current existence check to be applied."""
        while self.is_pending:
            await asyncio.gather(*(session.wait_settled() for session in self._sessions))

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _shift_touched(self, removed: int) -> None:
        # touched entry paths follow their entries after a removal
        shifted = set()
        for path in self._touched:
            parts = path.split(".")
            if len(parts) == 3 and parts[0] == FieldPath.LOCATIONS:
                index = int(parts[1])
                if index == removed:
                    continue
                if index > removed:
                    path = f"{parts[0]}.{index - 1}.{parts[2]}"
            shifted.add(path)
        self._touched = shifted

    def _new_session(self) -> EntryValidationSession:
        return EntryValidationSession(self.checker, on_status_change=self._on_session_change)

    def _on_session_change(self, session: EntryValidationSession) -> None:
        if session.status.is_settled:
            logger.debug(
                "Entry check settled",
                key=str(session.key),
                state=session.status.state.value,
            )
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
