"""Calendar, store lifecycle, substitution and conflict rules.

Pure functions over ORM rows (attached or transient). Nothing here touches a
session, so every rule can be exercised with literal input sets.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from roster.models.entities import Assignment, ColorKey, Employee, Store

DAY_FORMAT = "%Y-%m-%d"

TONE_DISABLED = "disabled"
TONE_EMPTY = "empty"
TONE_CONFLICT = "conflict"
TONE_SUBSTITUTION = "substitution"
TONE_DEFAULT = "default"

COLOR_KEYS = frozenset(member.value for member in ColorKey)

TONE_COLORS: dict[str, str] = {
    TONE_DISABLED: "#f5f5f5",
    TONE_EMPTY: "#ffffff",
    TONE_CONFLICT: "#fecaca",
    TONE_SUBSTITUTION: "#ffe7ba",
    ColorKey.GREEN.value: "#d9f7be",
    ColorKey.GRAY.value: "#f5f5f5",
    TONE_DEFAULT: "#ffffff",
}


# ---------- Calendar / range ----------
def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_days(year: int, month: int) -> list[int]:
    return list(range(1, days_in_month(year, month) + 1))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def parse_day(value: str | date) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date (dates pass through)."""

    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def format_day(value: date) -> str:
    return value.strftime(DAY_FORMAT)


def is_outside_range(day: str | date, lower: str | date | None, upper: str | date | None) -> bool:
    """True when ``day`` is strictly before ``lower`` or strictly after ``upper``."""

    current = parse_day(day)
    if lower is not None and current < parse_day(lower):
        return True
    if upper is not None and current > parse_day(upper):
        return True
    return False


# ---------- Store lifecycle ----------
def store_active_during_month(store: Store, year: int, month: int) -> bool:
    """Whether the store's lifetime overlaps the month at all."""

    month_start, month_end = month_bounds(year, month)
    if store.opened_at is not None and parse_day(store.opened_at) > month_end:
        return False
    if store.closed_at is not None and parse_day(store.closed_at) < month_start:
        return False
    return True


def date_editable(store: Store, day: str | date) -> bool:
    return not is_outside_range(day, store.opened_at, store.closed_at)


def day_editable(store: Store, year: int, month: int, day: int) -> bool:
    return date_editable(store, date(year, month, day))


# ---------- Substitution ----------
def is_substitution(explicit_flag: bool, employee: Employee | None, store: Store) -> bool:
    """Explicit flag OR home district differs from the store's district.

    The explicit flag is never downgraded; an employee without a home district
    (or unknown to the caller) contributes nothing.
    """

    if explicit_flag:
        return True
    if employee is None or employee.main_district_id is None:
        return False
    return employee.main_district_id != store.district_id


# ---------- Conflicts ----------
@dataclass(slots=True)
class Conflict:
    employee_id: UUID
    date: date
    store_ids: list[UUID] = field(default_factory=list)


def detect_conflicts(
    assignments: Iterable[Assignment],
    *,
    stores_by_id: Mapping[UUID, Store] | None = None,
    respect_lifecycle_bounds: bool = False,
) -> list[Conflict]:
    """Report every (employee, date) holding more than one assignment.

    Groups are emitted in first-seen order. With ``respect_lifecycle_bounds``
    an assignment is skipped when its store is unknown or closed on that date.
    """

    if respect_lifecycle_bounds and stores_by_id is None:
        raise ValueError("stores_by_id is required when respecting lifecycle bounds.")

    groups: dict[tuple[UUID, date], Conflict] = {}
    for assignment in assignments:
        day = parse_day(assignment.date)
        if respect_lifecycle_bounds:
            store = stores_by_id.get(assignment.store_id)
            if store is None or not date_editable(store, day):
                continue

        key = (assignment.employee_id, day)
        group = groups.get(key)
        if group is None:
            group = Conflict(employee_id=assignment.employee_id, date=day)
            groups[key] = group
        group.store_ids.append(assignment.store_id)

    return [group for group in groups.values() if len(group.store_ids) > 1]


def sort_conflicts(conflicts: Iterable[Conflict], employee_names: Mapping[UUID, str]) -> list[Conflict]:
    return sorted(
        conflicts,
        key=lambda item: (item.date, employee_names.get(item.employee_id, ""), str(item.employee_id)),
    )


# ---------- Presentation ----------
def cell_tone(
    *,
    color_key: str | None,
    substitution: bool,
    editable: bool,
    has_assignment: bool,
    conflicting: bool = False,
) -> str:
    if not editable:
        return TONE_DISABLED
    if not has_assignment:
        return TONE_EMPTY
    if conflicting:
        return TONE_CONFLICT
    if substitution:
        return TONE_SUBSTITUTION
    if color_key in COLOR_KEYS:
        return color_key
    return TONE_DEFAULT
