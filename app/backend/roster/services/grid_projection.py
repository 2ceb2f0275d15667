"""Month grid projections over raw assignment rows."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from roster.models.entities import Assignment, Employee, ShiftType, Store
from roster.services.roster_rules import (
    TONE_COLORS,
    cell_tone,
    date_editable,
    is_substitution,
    month_days,
    parse_day,
)


@dataclass(slots=True)
class StoreGridCell:
    day: int
    date: date
    editable: bool
    employee_id: UUID | None = None
    employee_name: str | None = None
    shift_type_code: str | None = None
    is_substitution: bool = False
    tone: str = ""
    label: str = ""

    @property
    def color(self) -> str:
        return TONE_COLORS[self.tone]


@dataclass(slots=True)
class StoreGridRow:
    store: Store
    cells: list[StoreGridCell]


@dataclass(slots=True)
class SummaryEntry:
    assignment_id: UUID
    store_id: UUID
    store_name: str
    shift_type_code: str | None
    is_substitution: bool


@dataclass(slots=True)
class SummaryCell:
    day: int
    date: date
    entries: list[SummaryEntry] = field(default_factory=list)
    tone: str = ""
    label: str = ""

    @property
    def color(self) -> str:
        return TONE_COLORS[self.tone]


@dataclass(slots=True)
class EmployeeSummaryRow:
    employee: Employee
    cells: list[SummaryCell]


def _shift_type_of(assignment: Assignment, shift_types_by_id: Mapping[UUID, ShiftType]) -> ShiftType | None:
    if assignment.shift_type_id is None:
        return None
    return shift_types_by_id.get(assignment.shift_type_id)


def index_store_assignments(
    *,
    year: int,
    month: int,
    stores_by_id: Mapping[UUID, Store],
    assignments: Iterable[Assignment],
) -> dict[UUID, dict[int, Assignment]]:
    """Sparse ``store -> day -> assignment`` map of assignments inside store lifetimes.

    Assignments for unknown stores, other months or closed days are dropped.
    At most one assignment is kept per key.
    """

    matrix: dict[UUID, dict[int, Assignment]] = {store_id: {} for store_id in stores_by_id}
    for assignment in assignments:
        store = stores_by_id.get(assignment.store_id)
        if store is None:
            continue
        day = parse_day(assignment.date)
        if (day.year, day.month) != (year, month):
            continue
        if not date_editable(store, day):
            continue
        matrix[store.id][day.day] = assignment
    return matrix


def index_employee_assignments(
    *,
    year: int,
    month: int,
    employee_ids: Iterable[UUID],
    stores_by_id: Mapping[UUID, Store],
    assignments: Iterable[Assignment],
) -> dict[UUID, dict[int, list[Assignment]]]:
    """Sparse ``employee -> day -> [assignments]`` map keeping every surviving entry."""

    matrix: dict[UUID, dict[int, list[Assignment]]] = {employee_id: {} for employee_id in employee_ids}
    for assignment in assignments:
        store = stores_by_id.get(assignment.store_id)
        if store is None:
            continue
        day = parse_day(assignment.date)
        if (day.year, day.month) != (year, month):
            continue
        if not date_editable(store, day):
            continue
        matrix.setdefault(assignment.employee_id, {}).setdefault(day.day, []).append(assignment)
    return matrix


def project_store_grid(
    *,
    year: int,
    month: int,
    stores: Sequence[Store],
    employees_by_id: Mapping[UUID, Employee],
    shift_types_by_id: Mapping[UUID, ShiftType],
    assignments: Iterable[Assignment],
) -> list[StoreGridRow]:
    """Build one row per store with a cell for every day of the month."""

    stores_by_id = {store.id: store for store in stores}
    matrix = index_store_assignments(
        year=year,
        month=month,
        stores_by_id=stores_by_id,
        assignments=assignments,
    )

    rows: list[StoreGridRow] = []
    for store in stores:
        by_day = matrix.get(store.id, {})
        cells: list[StoreGridCell] = []
        for day in month_days(year, month):
            current = date(year, month, day)
            editable = date_editable(store, current)
            cell = StoreGridCell(day=day, date=current, editable=editable)

            assignment = by_day.get(day)
            shift_type = None
            if assignment is not None:
                employee = employees_by_id.get(assignment.employee_id)
                shift_type = _shift_type_of(assignment, shift_types_by_id)
                cell.employee_id = assignment.employee_id
                cell.employee_name = employee.full_name if employee else None
                cell.shift_type_code = shift_type.code if shift_type else None
                cell.is_substitution = is_substitution(assignment.is_substitution, employee, store)
                code_part = f"({cell.shift_type_code})" if cell.shift_type_code else None
                cell.label = " ".join(part for part in (cell.employee_name, code_part) if part)

            # A cell without a resolved shift type renders like an empty one.
            cell.tone = cell_tone(
                color_key=shift_type.color_key if shift_type else None,
                substitution=cell.is_substitution,
                editable=editable,
                has_assignment=shift_type is not None,
            )
            cells.append(cell)
        rows.append(StoreGridRow(store=store, cells=cells))
    return rows


def project_employee_summary(
    *,
    year: int,
    month: int,
    employees: Sequence[Employee],
    stores_by_id: Mapping[UUID, Store],
    shift_types_by_id: Mapping[UUID, ShiftType],
    assignments: Iterable[Assignment],
) -> list[EmployeeSummaryRow]:
    """Build one row per employee; a day holding several stores is kept whole."""

    matrix = index_employee_assignments(
        year=year,
        month=month,
        employee_ids=[employee.id for employee in employees],
        stores_by_id=stores_by_id,
        assignments=assignments,
    )

    rows: list[EmployeeSummaryRow] = []
    for employee in employees:
        by_day = matrix.get(employee.id, {})
        cells: list[SummaryCell] = []
        for day in month_days(year, month):
            cell = SummaryCell(day=day, date=date(year, month, day))
            for assignment in by_day.get(day, []):
                store = stores_by_id[assignment.store_id]
                shift_type = _shift_type_of(assignment, shift_types_by_id)
                cell.entries.append(
                    SummaryEntry(
                        assignment_id=assignment.id,
                        store_id=store.id,
                        store_name=store.name,
                        shift_type_code=shift_type.code if shift_type else None,
                        is_substitution=is_substitution(assignment.is_substitution, employee, store),
                    )
                )

            first_color_key = None
            if len(cell.entries) == 1:
                entry = cell.entries[0]
                cell.label = f"{entry.store_name} ({entry.shift_type_code})" if entry.shift_type_code else entry.store_name
                shift_type = _shift_type_of(by_day[day][0], shift_types_by_id)
                first_color_key = shift_type.color_key if shift_type else None
            elif cell.entries:
                cell.label = " / ".join(entry.store_name for entry in cell.entries)

            cell.tone = cell_tone(
                color_key=first_color_key,
                substitution=len(cell.entries) == 1 and cell.entries[0].is_substitution,
                editable=True,
                has_assignment=bool(cell.entries),
                conflicting=len(cell.entries) > 1,
            )
            cells.append(cell)
        rows.append(EmployeeSummaryRow(employee=employee, cells=cells))
    return rows
