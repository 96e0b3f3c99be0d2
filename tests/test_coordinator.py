"""Tests for ListValidationCoordinator."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from weather_form.form.state import FormState, LocationEntry
from weather_form.validation.coordinator import (
    ListValidationCoordinator,
    find_duplicates,
)
from weather_form.validation.errors import ErrorKind, FieldPath
from weather_form.validation.session import EntryState

from .conftest import TODAY, drain


def kinds(errors):
    return [error.kind for error in errors]


def make_form(*locations: tuple[str, str]) -> FormState:
    return FormState(
        date=TODAY.isoformat(),
        locations=[LocationEntry(city=city, country=country) for city, country in locations],
    )


class TestFindDuplicates:
    def test_case_and_whitespace_variants_are_duplicates(self):
        locations = [
            LocationEntry(city="Paris", country="France"),
            LocationEntry(city="paris", country=" FRANCE"),
        ]

        assert find_duplicates(locations) == {0: 1}

    def test_every_occurrence_but_the_last_is_reported(self):
        locations = [LocationEntry(city="Rome", country="Italy") for _ in range(3)]

        assert find_duplicates(locations) == {0: 1, 1: 2}

    def test_blank_entries_are_not_duplicates(self):
        locations = [LocationEntry(), LocationEntry(), LocationEntry(city="Rome")]

        assert find_duplicates(locations) == {}


@pytest.mark.asyncio
async def test_end_to_end_remove_and_add_back(checker):
    coordinator = ListValidationCoordinator(
        checker=checker, form=make_form(("Paris", "France")), today=lambda: TODAY
    )
    await coordinator.wait_until_settled()

    assert coordinator.entry_status(0).is_valid
    assert coordinator.is_valid

    coordinator.remove_entry(0)

    assert kinds(coordinator.list_errors()) == [ErrorKind.EMPTY_ARRAY]
    assert not coordinator.is_valid

    index = coordinator.add_entry()
    coordinator.set_city(index, "Paris")
    coordinator.set_country(index, "France")
    await coordinator.wait_until_settled()

    assert coordinator.errors() == []
    assert coordinator.is_valid


@pytest.mark.asyncio
async def test_duplicate_reported_once_on_first_entry(checker, searcher):
    coordinator = ListValidationCoordinator(
        checker=checker,
        form=make_form(("Paris", "France"), ("paris", " FRANCE")),
        today=lambda: TODAY,
    )
    await coordinator.wait_until_settled()

    duplicates = [e for e in coordinator.errors() if e.kind is ErrorKind.DUPLICATE_LOCATION]

    assert len(duplicates) == 1
    assert duplicates[0].path == FieldPath.city(0)
    assert duplicates[0].message == "Location is also listed at position 2"
    assert searcher.calls == [("paris", "france")]
    assert not coordinator.is_valid


@pytest.mark.asyncio
async def test_removing_a_duplicate_clears_the_error(checker):
    coordinator = ListValidationCoordinator(
        checker=checker,
        form=make_form(("Paris", "France"), ("Berlin", "Germany"), ("Paris", "France")),
        today=lambda: TODAY,
    )
    await coordinator.wait_until_settled()
    assert ErrorKind.DUPLICATE_LOCATION in kinds(coordinator.entry_errors(0))

    coordinator.remove_entry(2)

    assert coordinator.errors() == []
    assert coordinator.is_valid


@pytest.mark.parametrize("count", [1, 2, 5])
def test_list_within_bounds_has_no_cardinality_error(checker, count):
    coordinator = ListValidationCoordinator(
        checker=checker, form=make_form(*[("", "")] * count), today=lambda: TODAY
    )

    assert coordinator.list_errors() == []


def test_empty_list(checker):
    coordinator = ListValidationCoordinator(
        checker=checker, form=make_form(), today=lambda: TODAY
    )

    errors = coordinator.list_errors()

    assert kinds(errors) == [ErrorKind.EMPTY_ARRAY]
    assert errors[0].path == FieldPath.LOCATIONS
    assert not coordinator.is_valid


def test_too_many_locations(coordinator):
    for _ in range(5):
        coordinator.add_entry()

    assert len(coordinator.form.locations) == 6
    errors = coordinator.list_errors()
    assert kinds(errors) == [ErrorKind.TOO_MANY]
    assert errors[0].message == "Maximum 5 locations allowed"


def test_no_upper_bound_when_disabled(checker):
    coordinator = ListValidationCoordinator(
        checker=checker, form=make_form(*[("", "")] * 8), max_locations=None
    )

    assert coordinator.list_errors() == []


def test_sync_rules_apply_per_entry(coordinator):
    coordinator.set_city(0, "P")
    coordinator.set_country(0, "")

    errors = coordinator.entry_errors(0)

    assert kinds(errors) == [ErrorKind.TOO_SHORT, ErrorKind.REQUIRED]
    assert errors[0].path == FieldPath.city(0)
    assert errors[1].path == FieldPath.country(0)


@pytest.mark.asyncio
async def test_one_character_city_goes_idle_without_not_found(coordinator, searcher):
    gate = searcher.hold("Atlantis", "Greece")
    coordinator.set_city(0, "Atlantis")
    coordinator.set_country(0, "Greece")
    await drain()
    assert coordinator.is_pending

    coordinator.set_city(0, "A")
    gate.set()
    await drain()

    assert coordinator.entry_status(0).state is EntryState.IDLE
    assert ErrorKind.CITY_NOT_FOUND not in kinds(coordinator.errors())
    assert not coordinator.is_pending


@pytest.mark.asyncio
async def test_async_errors_attach_to_city(coordinator):
    coordinator.set_city(0, "London")
    coordinator.set_country(0, "France")
    index = coordinator.add_entry()
    coordinator.set_city(index, "Atlantis")
    coordinator.set_country(index, "Greece")
    await coordinator.wait_until_settled()

    mismatch = coordinator.errors_for(FieldPath.city(0))
    missing = coordinator.errors_for(FieldPath.city(1))

    assert [(e.kind, e.message) for e in mismatch] == [
        (ErrorKind.CITY_COUNTRY_MISMATCH, "City does not exist in the selected country")
    ]
    assert [(e.kind, e.message) for e in missing] == [
        (ErrorKind.CITY_NOT_FOUND, "City not found")
    ]


@pytest.mark.asyncio
async def test_fixing_the_country_makes_entry_valid(coordinator):
    coordinator.set_city(0, "London")
    coordinator.set_country(0, "France")
    await coordinator.wait_until_settled()
    assert not coordinator.is_valid

    coordinator.set_country(0, "Canada")
    await coordinator.wait_until_settled()

    assert coordinator.entry_status(0).is_valid
    assert coordinator.is_valid


@pytest.mark.asyncio
async def test_pending_entry_blocks_validity(coordinator, searcher):
    gate = searcher.hold("Paris", "France")
    coordinator.set_city(0, "Paris")
    coordinator.set_country(0, "France")

    assert coordinator.errors() == []
    assert coordinator.is_pending
    assert not coordinator.is_valid

    gate.set()
    await coordinator.wait_until_settled()

    assert coordinator.is_valid


@pytest.mark.asyncio
async def test_removal_keeps_sessions_aligned(coordinator):
    coordinator.set_city(0, "London")
    coordinator.set_country(0, "France")
    index = coordinator.add_entry()
    coordinator.set_city(index, "Rome")
    coordinator.set_country(index, "Italy")
    await coordinator.wait_until_settled()

    coordinator.remove_entry(0)

    assert len(coordinator.sessions) == 1
    assert coordinator.entry_status(0).is_valid
    assert coordinator.is_valid


@pytest.mark.parametrize(
    "offset, expected",
    [
        (-1, [ErrorKind.PAST_DATE]),
        (0, []),
        (14, []),
        (15, [ErrorKind.FAR_FUTURE]),
    ],
)
def test_date_window(coordinator, offset, expected):
    coordinator.set_date((TODAY + timedelta(days=offset)).isoformat())

    assert kinds(coordinator.errors_for(FieldPath.DATE)) == expected


def test_unsupported_temperature_unit(coordinator):
    coordinator.set_temperature_unit("kelvin")

    assert kinds(coordinator.errors_for(FieldPath.TEMPERATURE_UNIT)) == [
        ErrorKind.INVALID_UNIT
    ]


def test_visible_errors_follow_touched_fields(coordinator):
    coordinator.set_date("")

    assert coordinator.visible_errors() == []

    coordinator.mark_touched(FieldPath.city(0))
    assert {e.path for e in coordinator.visible_errors()} == {FieldPath.city(0)}

    coordinator.mark_all_touched()
    assert {e.path for e in coordinator.visible_errors()} == {
        FieldPath.DATE,
        FieldPath.city(0),
        FieldPath.country(0),
    }


def test_touched_paths_shift_on_removal(coordinator):
    coordinator.add_entry()
    coordinator.add_entry()
    coordinator.mark_touched(FieldPath.city(0))
    coordinator.mark_touched(FieldPath.city(2))

    coordinator.remove_entry(0)

    assert not coordinator.is_touched(FieldPath.city(0))
    assert coordinator.is_touched(FieldPath.city(1))
    assert not coordinator.is_touched(FieldPath.city(2))


@pytest.mark.asyncio
async def test_listeners_are_notified_until_unsubscribed(coordinator):
    listener = MagicMock()
    unsubscribe = coordinator.subscribe(listener)

    coordinator.set_city(0, "Rome")
    coordinator.set_country(0, "Italy")
    await coordinator.wait_until_settled()

    # city edit, pending status, country edit, settled status
    assert listener.call_count == 4
    listener.assert_called_with(coordinator)

    unsubscribe()
    coordinator.set_date(TODAY.isoformat())

    assert listener.call_count == 4


@pytest.mark.asyncio
async def test_clear_resets_form_and_interaction(coordinator, searcher):
    gate = searcher.hold("Paris", "France")
    coordinator.set_city(0, "Paris")
    coordinator.set_country(0, "France")
    coordinator.add_entry()
    coordinator.mark_all_touched()

    coordinator.clear()
    gate.set()
    await drain()

    assert coordinator.form.locations == [LocationEntry()]
    assert coordinator.visible_errors() == []
    assert coordinator.entry_status(0).state is EntryState.IDLE


def test_negative_index_removal_keeps_touched_paths_aligned(coordinator):
    coordinator.add_entry()
    coordinator.mark_touched(FieldPath.city(1))

    coordinator.remove_entry(-1)

    assert len(coordinator.form.locations) == 1
    assert not coordinator.is_touched(FieldPath.city(0))
    assert not coordinator.is_touched("locations.-1.city")


def test_negative_index_removal_shifts_later_entries(coordinator):
    coordinator.add_entry()
    coordinator.add_entry()
    coordinator.set_city(2, "Rome")
    coordinator.mark_touched(FieldPath.city(2))

    coordinator.remove_entry(-2)

    assert coordinator.form.locations[1].city == "Rome"
    assert coordinator.is_touched(FieldPath.city(1))
    assert not coordinator.is_touched(FieldPath.city(2))


def test_out_of_range_removal_raises(coordinator):
    with pytest.raises(IndexError):
        coordinator.remove_entry(-2)

    assert len(coordinator.sessions) == 1
