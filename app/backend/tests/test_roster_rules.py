from __future__ import annotations

import uuid
from datetime import date, timedelta

import pytest

from roster.models.entities import Assignment, Employee, Store
from roster.services.roster_rules import (
    TONE_COLORS,
    TONE_CONFLICT,
    TONE_DEFAULT,
    TONE_DISABLED,
    TONE_EMPTY,
    TONE_SUBSTITUTION,
    Conflict,
    cell_tone,
    date_editable,
    day_editable,
    days_in_month,
    detect_conflicts,
    format_day,
    is_outside_range,
    is_substitution,
    month_days,
    parse_day,
    sort_conflicts,
    store_active_during_month,
)


def _store(
    *,
    district_id: uuid.UUID | None = None,
    opened_at: date | None = None,
    closed_at: date | None = None,
) -> Store:
    return Store(
        id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        district_id=district_id or uuid.uuid4(),
        name="Store",
        is_active=True,
        opened_at=opened_at,
        closed_at=closed_at,
    )


def _employee(*, main_district_id: uuid.UUID | None) -> Employee:
    return Employee(
        id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        full_name="Employee",
        main_district_id=main_district_id,
        is_active=True,
    )


def _assignment(employee_id: uuid.UUID, store_id: uuid.UUID, day: date) -> Assignment:
    return Assignment(
        id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        employee_id=employee_id,
        store_id=store_id,
        date=day,
        shift_type_id=None,
        is_substitution=False,
    )


def test_month_calendar_helpers() -> None:
    assert days_in_month(2025, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2025, 12) == 31
    assert month_days(2025, 4) == list(range(1, 31))

    assert parse_day("2025-02-10") == date(2025, 2, 10)
    assert parse_day(date(2025, 2, 10)) == date(2025, 2, 10)
    assert format_day(date(2025, 1, 5)) == "2025-01-05"


def test_is_outside_range_is_strict_at_both_bounds() -> None:
    assert is_outside_range("2025-02-09", "2025-02-10", None) is True
    assert is_outside_range("2025-02-10", "2025-02-10", None) is False
    assert is_outside_range("2025-02-20", None, "2025-02-20") is False
    assert is_outside_range("2025-02-21", None, "2025-02-20") is True
    assert is_outside_range("1900-01-01", None, None) is False


def test_day_editable_matches_inclusive_lifetime() -> None:
    opened = date(2025, 3, 10)
    closed = date(2025, 4, 5)
    store = _store(opened_at=opened, closed_at=closed)

    current = date(2025, 3, 1)
    while current <= date(2025, 4, 30):
        assert date_editable(store, current) == (opened <= current <= closed)
        current += timedelta(days=1)


def test_unbounded_store_is_always_in_scope_and_editable() -> None:
    store = _store()

    for year, month in [(1999, 1), (2025, 2), (2040, 12)]:
        assert store_active_during_month(store, year, month) is True
        assert all(day_editable(store, year, month, day) for day in month_days(year, month))


def test_month_scope_excludes_stores_outside_lifetime() -> None:
    opens_later = _store(opened_at=date(2025, 3, 1))
    assert store_active_during_month(opens_later, 2025, 2) is False
    assert store_active_during_month(opens_later, 2025, 3) is True

    closed_in_past = _store(closed_at=date(2024, 11, 15))
    assert store_active_during_month(closed_in_past, 2024, 11) is True
    assert store_active_during_month(closed_in_past, 2024, 12) is False
    assert store_active_during_month(closed_in_past, 2025, 6) is False

    mid_month = _store(opened_at=date(2025, 2, 10))
    assert store_active_during_month(mid_month, 2025, 2) is True
    assert not day_editable(mid_month, 2025, 2, 9)
    assert day_editable(mid_month, 2025, 2, 10)


def test_inverted_lifetime_has_no_editable_day() -> None:
    store = _store(opened_at=date(2025, 5, 20), closed_at=date(2025, 5, 10))

    assert not any(day_editable(store, 2025, 5, day) for day in month_days(2025, 5))


def test_substitution_is_explicit_flag_or_district_mismatch() -> None:
    home = uuid.uuid4()
    other = uuid.uuid4()
    store = _store(district_id=home)

    for explicit in (False, True):
        assert is_substitution(explicit, _employee(main_district_id=home), store) == explicit
        assert is_substitution(explicit, _employee(main_district_id=other), store) is True
        assert is_substitution(explicit, _employee(main_district_id=None), store) == explicit
        assert is_substitution(explicit, None, store) == explicit


def test_conflict_reported_for_employee_in_two_stores_on_same_day() -> None:
    employee_a = uuid.uuid4()
    store_1 = uuid.uuid4()
    store_2 = uuid.uuid4()
    day = date(2025, 1, 1)

    conflicts = detect_conflicts(
        [
            _assignment(employee_a, store_1, day),
            _assignment(employee_a, store_2, day),
        ]
    )

    assert conflicts == [Conflict(employee_id=employee_a, date=day, store_ids=[store_1, store_2])]


def test_no_conflict_for_two_employees_in_same_store() -> None:
    store_1 = uuid.uuid4()
    day = date(2025, 1, 1)

    conflicts = detect_conflicts(
        [
            _assignment(uuid.uuid4(), store_1, day),
            _assignment(uuid.uuid4(), store_1, day),
        ]
    )

    assert conflicts == []


def test_conflicts_keep_grouping_order_and_accept_string_dates() -> None:
    employee_a = uuid.uuid4()
    employee_b = uuid.uuid4()
    store_1 = uuid.uuid4()
    store_2 = uuid.uuid4()

    assignments = [
        _assignment(employee_b, store_1, date(2025, 1, 3)),
        _assignment(employee_a, store_1, date(2025, 1, 1)),
        _assignment(employee_a, store_2, date(2025, 1, 1)),
        _assignment(employee_b, store_2, date(2025, 1, 3)),
    ]
    assignments[1].date = "2025-01-01"

    conflicts = detect_conflicts(assignments)

    assert [(item.employee_id, item.date) for item in conflicts] == [
        (employee_b, date(2025, 1, 3)),
        (employee_a, date(2025, 1, 1)),
    ]


def test_lifecycle_bounds_switch_changes_conflict_pass() -> None:
    employee_a = uuid.uuid4()
    open_store = _store()
    closed_store = _store(closed_at=date(2025, 1, 10))
    day = date(2025, 1, 20)
    assignments = [
        _assignment(employee_a, open_store.id, day),
        _assignment(employee_a, closed_store.id, day),
    ]
    stores_by_id = {open_store.id: open_store, closed_store.id: closed_store}

    assert len(detect_conflicts(assignments, stores_by_id=stores_by_id, respect_lifecycle_bounds=False)) == 1
    assert detect_conflicts(assignments, stores_by_id=stores_by_id, respect_lifecycle_bounds=True) == []
    # Unknown stores are skipped when bounds are respected.
    assert detect_conflicts(assignments, stores_by_id={}, respect_lifecycle_bounds=True) == []


def test_respecting_bounds_requires_stores() -> None:
    with pytest.raises(ValueError):
        detect_conflicts([], respect_lifecycle_bounds=True)


def test_sort_conflicts_by_date_then_employee_name() -> None:
    anna = uuid.uuid4()
    boris = uuid.uuid4()
    conflicts = [
        Conflict(employee_id=boris, date=date(2025, 1, 2)),
        Conflict(employee_id=boris, date=date(2025, 1, 1)),
        Conflict(employee_id=anna, date=date(2025, 1, 2)),
    ]

    ordered = sort_conflicts(conflicts, {anna: "Anna", boris: "Boris"})

    assert [(item.date.day, item.employee_id) for item in ordered] == [(1, boris), (2, anna), (2, boris)]


def test_cell_tone_precedence() -> None:
    assert cell_tone(color_key="green", substitution=True, editable=False, has_assignment=True) == TONE_DISABLED
    assert cell_tone(color_key=None, substitution=False, editable=True, has_assignment=False) == TONE_EMPTY
    assert (
        cell_tone(color_key="green", substitution=True, editable=True, has_assignment=True, conflicting=True)
        == TONE_CONFLICT
    )
    assert cell_tone(color_key="green", substitution=True, editable=True, has_assignment=True) == TONE_SUBSTITUTION
    assert cell_tone(color_key="green", substitution=False, editable=True, has_assignment=True) == "green"
    assert cell_tone(color_key="gray", substitution=False, editable=True, has_assignment=True) == "gray"
    assert cell_tone(color_key="purple", substitution=False, editable=True, has_assignment=True) == TONE_DEFAULT
    assert cell_tone(color_key=None, substitution=False, editable=True, has_assignment=True) == TONE_DEFAULT
    assert TONE_COLORS[TONE_SUBSTITUTION] == "#ffe7ba"
