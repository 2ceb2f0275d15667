"""Application service for district roster grids and single-cell assignment edits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roster.core.config import Settings, get_settings
from roster.core.errors import DayNotEditable, ScopeLoadFailed, UnknownShiftType, WriteFailed
from roster.models.entities import Assignment, District, Employee, ShiftType, Store
from roster.repositories.roster_repository import RosterRepository
from roster.services.catalog_service import CatalogService
from roster.services.grid_projection import (
    EmployeeSummaryRow,
    StoreGridCell,
    StoreGridRow,
    SummaryCell,
    project_employee_summary,
    project_store_grid,
)
from roster.services.roster_rules import (
    Conflict,
    date_editable,
    detect_conflicts,
    format_day,
    is_substitution,
    month_bounds,
    month_days,
    sort_conflicts,
    store_active_during_month,
)

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "?"


@dataclass(frozen=True, slots=True)
class GridScope:
    """Immutable (district, year, month) a grid is computed over."""

    district_id: UUID
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12 or not 1 <= self.year <= 9999:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="year/month do not form a valid calendar month.",
            )

    @property
    def bounds(self) -> tuple[date, date]:
        return month_bounds(self.year, self.month)


@dataclass(slots=True)
class CellEditInput:
    employee_id: UUID | None = None
    shift_type_code: str | None = None
    is_substitution: bool = False


@dataclass(slots=True)
class ScopeData:
    district: District
    employees: list[Employee]
    stores: list[Store]
    shift_types: list[ShiftType]
    assignments: list[Assignment]


class RosterService:
    """Scope loading, grid projection and the assignment write path."""

    def __init__(self, db: Session, settings: Settings | None = None) -> None:
        self.db = db
        self.repo = RosterRepository(db)
        self.settings = settings or get_settings()

    # ---------- Scope loading ----------
    def _load_district(self, district_id: UUID) -> District:
        try:
            district = self.repo.get_district(district_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load district %s", district_id)
            raise ScopeLoadFailed("Failed to load district.") from exc
        if district is None:
            raise ScopeLoadFailed("District not found.", status_code=status.HTTP_404_NOT_FOUND)
        return district

    def load_store_scope(self, scope: GridScope) -> ScopeData:
        """District stores alive during the month, every company employee and their assignments."""

        district = self._load_district(scope.district_id)
        from_date, to_date = scope.bounds
        try:
            employees = list(self.repo.list_employees(company_id=district.company_id))
            district_stores = self.repo.list_stores(company_id=district.company_id, district_id=district.id)
            stores = [
                store for store in district_stores if store_active_during_month(store, scope.year, scope.month)
            ]
            shift_types = list(self.repo.list_shift_types(district.company_id))
            assignments = list(
                self.repo.list_assignments_for_stores(
                    {store.id for store in stores},
                    from_date=from_date,
                    to_date=to_date,
                )
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to load store grid for district %s", district.id)
            raise ScopeLoadFailed("Failed to load roster data.") from exc

        logger.debug(
            "Loaded store scope district=%s %04d-%02d: %d stores, %d assignments",
            district.id,
            scope.year,
            scope.month,
            len(stores),
            len(assignments),
        )
        return ScopeData(
            district=district,
            employees=employees,
            stores=stores,
            shift_types=shift_types,
            assignments=assignments,
        )

    def load_summary_scope(self, scope: GridScope) -> ScopeData:
        """Home employees of the district, every company store and the employees' assignments."""

        district = self._load_district(scope.district_id)
        from_date, to_date = scope.bounds
        try:
            employees = list(
                self.repo.list_employees(company_id=district.company_id, main_district_id=district.id)
            )
            stores = list(self.repo.list_stores(company_id=district.company_id))
            shift_types = list(self.repo.list_shift_types(district.company_id))
            assignments = list(
                self.repo.list_assignments_for_employees(
                    {employee.id for employee in employees},
                    from_date=from_date,
                    to_date=to_date,
                )
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to load employee summary for district %s", district.id)
            raise ScopeLoadFailed("Failed to load roster data.") from exc

        return ScopeData(
            district=district,
            employees=employees,
            stores=stores,
            shift_types=shift_types,
            assignments=assignments,
        )

    # ---------- Serialization ----------
    @staticmethod
    def serialize_store_cell(cell: StoreGridCell) -> dict[str, object]:
        return {
            "day": cell.day,
            "date": format_day(cell.date),
            "editable": cell.editable,
            "employee_id": str(cell.employee_id) if cell.employee_id else None,
            "employee_name": cell.employee_name,
            "shift_type_code": cell.shift_type_code,
            "is_substitution": cell.is_substitution,
            "tone": cell.tone,
            "color": cell.color,
            "label": cell.label,
        }

    @staticmethod
    def serialize_summary_cell(cell: SummaryCell) -> dict[str, object]:
        return {
            "day": cell.day,
            "date": format_day(cell.date),
            "entries": [
                {
                    "assignment_id": str(entry.assignment_id),
                    "store_id": str(entry.store_id),
                    "store_name": entry.store_name,
                    "shift_type_code": entry.shift_type_code,
                    "is_substitution": entry.is_substitution,
                }
                for entry in cell.entries
            ],
            "tone": cell.tone,
            "color": cell.color,
            "label": cell.label,
        }

    def _serialize_conflicts(
        self,
        conflicts: list[Conflict],
        *,
        employee_names: dict[UUID, str],
        store_names: dict[UUID, str],
    ) -> dict[str, object]:
        ordered = sort_conflicts(conflicts, employee_names)
        limit = self.settings.conflict_preview_limit
        return {
            "conflicts": [
                {
                    "employee_id": str(conflict.employee_id),
                    "employee_name": employee_names.get(conflict.employee_id, UNKNOWN_LABEL),
                    "date": format_day(conflict.date),
                    "store_ids": [str(store_id) for store_id in conflict.store_ids],
                    "store_names": [store_names.get(store_id, UNKNOWN_LABEL) for store_id in conflict.store_ids],
                }
                for conflict in ordered[:limit]
            ],
            "conflict_count": len(ordered),
            "conflicts_hidden": max(0, len(ordered) - limit),
        }

    # ---------- Grid reads ----------
    def read_district_grid(self, scope: GridScope) -> dict[str, object]:
        data = self.load_store_scope(scope)
        employees_by_id = {employee.id: employee for employee in data.employees}
        rows: list[StoreGridRow] = project_store_grid(
            year=scope.year,
            month=scope.month,
            stores=data.stores,
            employees_by_id=employees_by_id,
            shift_types_by_id={shift_type.id: shift_type for shift_type in data.shift_types},
            assignments=data.assignments,
        )
        # Store view scans the raw district assignments, lifecycle bounds ignored.
        conflicts = detect_conflicts(data.assignments, respect_lifecycle_bounds=False)

        return {
            "district": CatalogService.serialize_district(data.district),
            "year": scope.year,
            "month": scope.month,
            "days": month_days(scope.year, scope.month),
            "stores": [
                {
                    **CatalogService.serialize_store(row.store),
                    "cells": [self.serialize_store_cell(cell) for cell in row.cells],
                }
                for row in rows
            ],
            "employees": [CatalogService.serialize_employee(employee) for employee in data.employees],
            "shift_types": [CatalogService.serialize_shift_type(shift_type) for shift_type in data.shift_types],
            **self._serialize_conflicts(
                conflicts,
                employee_names={employee.id: employee.full_name for employee in data.employees},
                store_names={store.id: store.name for store in data.stores},
            ),
        }

    def read_district_summary(self, scope: GridScope) -> dict[str, object]:
        data = self.load_summary_scope(scope)
        stores_by_id = {store.id: store for store in data.stores}
        rows: list[EmployeeSummaryRow] = project_employee_summary(
            year=scope.year,
            month=scope.month,
            employees=data.employees,
            stores_by_id=stores_by_id,
            shift_types_by_id={shift_type.id: shift_type for shift_type in data.shift_types},
            assignments=data.assignments,
        )
        conflicts = detect_conflicts(
            data.assignments,
            stores_by_id=stores_by_id,
            respect_lifecycle_bounds=True,
        )

        return {
            "district": CatalogService.serialize_district(data.district),
            "year": scope.year,
            "month": scope.month,
            "days": month_days(scope.year, scope.month),
            "employees": [
                {
                    **CatalogService.serialize_employee(row.employee),
                    "cells": [self.serialize_summary_cell(cell) for cell in row.cells],
                }
                for row in rows
            ],
            **self._serialize_conflicts(
                conflicts,
                employee_names={employee.id: employee.full_name for employee in data.employees},
                store_names={store.id: store.name for store in data.stores},
            ),
        }

    # ---------- Cell edits ----------
    def _get_editable_store(self, store_id: UUID, day: date) -> Store:
        store = self.repo.get_store(store_id)
        if store is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found.")
        if not date_editable(store, day):
            raise DayNotEditable()
        return store

    def read_cell(self, *, store_id: UUID, day: date) -> dict[str, object]:
        """Current cell content used to pre-fill an edit form."""

        store = self._get_editable_store(store_id, day)
        rows = self.repo.list_assignments_for_store_day(store_id=store.id, day=day)
        assignment = rows[0] if rows else None

        shift_type = None
        employee = None
        if assignment is not None:
            employee = self.repo.get_employee(assignment.employee_id)
            if assignment.shift_type_id is not None:
                shift_type = self.repo.get_shift_type(assignment.shift_type_id)

        return {
            "store_id": str(store.id),
            "date": format_day(day),
            "editable": True,
            "employee_id": str(assignment.employee_id) if assignment else None,
            "shift_type_code": shift_type.code if shift_type else None,
            "is_substitution": is_substitution(assignment.is_substitution, employee, store) if assignment else False,
        }

    def save_cell(self, *, store_id: UUID, day: date, data: CellEditInput) -> dict[str, object]:
        """Set or clear the assignment of one (store, date) cell and return the reloaded grid."""

        store = self._get_editable_store(store_id, day)
        code = data.shift_type_code.strip() if data.shift_type_code else None

        if data.employee_id is None and not code:
            self._clear_cell(store, day)
        elif data.employee_id is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="employee_id is required when shift_type_code is set.",
            )
        else:
            self._set_cell(
                store,
                day,
                employee_id=data.employee_id,
                code=code,
                explicit_substitution=data.is_substitution,
            )

        return self.read_district_grid(GridScope(store.district_id, day.year, day.month))

    def clear_cell(self, *, store_id: UUID, day: date) -> dict[str, object]:
        return self.save_cell(store_id=store_id, day=day, data=CellEditInput())

    def _clear_cell(self, store: Store, day: date) -> None:
        try:
            removed = self.repo.delete_assignments_for_store_day(store_id=store.id, day=day)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Clearing store %s on %s failed: %s", store.id, day, exc)
            raise WriteFailed(
                "Failed to delete the assignment.",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from exc
        logger.info("Cleared store %s on %s (%d removed)", store.id, day, removed)

    def _set_cell(
        self,
        store: Store,
        day: date,
        *,
        employee_id: UUID,
        code: str | None,
        explicit_substitution: bool,
    ) -> None:
        shift_type = None
        if code:
            shift_type = self.repo.get_shift_type_by_code(company_id=store.company_id, code=code)
        if shift_type is None:
            raise UnknownShiftType(code or "")

        employee = self.repo.get_employee(employee_id)
        if employee is None or employee.company_id != store.company_id:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="employee_id must reference an employee of the store's company.",
            )

        substitution = is_substitution(explicit_substitution, employee, store)

        # One transaction: clear the store's day, then upsert on (employee, date).
        try:
            self.repo.delete_assignments_for_store_day(store_id=store.id, day=day)
            row = self.repo.get_assignment_for_employee_day(employee_id=employee.id, day=day)
            if row is None:
                self.repo.add_assignment(
                    Assignment(
                        company_id=store.company_id,
                        employee_id=employee.id,
                        store_id=store.id,
                        date=day,
                        shift_type_id=shift_type.id,
                        is_substitution=substitution,
                    )
                )
            else:
                if row.store_id != store.id:
                    logger.info(
                        "Moving employee %s on %s from store %s to store %s",
                        employee.id,
                        day,
                        row.store_id,
                        store.id,
                    )
                row.company_id = store.company_id
                row.store_id = store.id
                row.shift_type_id = shift_type.id
                row.is_substitution = substitution
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Saving store %s on %s violated a constraint: %s", store.id, day, exc)
            raise WriteFailed("Assignment save violated a uniqueness constraint.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Saving store %s on %s failed: %s", store.id, day, exc)
            raise WriteFailed(
                "Failed to save the assignment.",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from exc

        logger.info(
            "Assigned employee %s to store %s on %s (substitution=%s)",
            employee.id,
            store.id,
            day,
            substitution,
        )
