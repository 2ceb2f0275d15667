"""Repository helpers for the roster catalog and assignment grid."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from roster.models.entities import Assignment, Company, District, Employee, ShiftType, Store


class RosterRepository:
    """Persistence operations used by the catalog and roster services."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------- Companies ----------
    def list_companies(self) -> list[Company]:
        return self.db.scalars(select(Company).order_by(Company.name.asc())).all()

    def get_company(self, company_id: UUID) -> Company | None:
        return self.db.scalar(select(Company).where(Company.id == company_id))

    def add_company(self, company: Company) -> Company:
        self.db.add(company)
        self.db.flush()
        return company

    # ---------- Districts ----------
    def list_districts(self, *, company_id: UUID | None = None) -> list[District]:
        statement = select(District)
        if company_id is not None:
            statement = statement.where(District.company_id == company_id)
        return self.db.scalars(statement.order_by(District.name.asc())).all()

    def get_district(self, district_id: UUID) -> District | None:
        return self.db.scalar(select(District).where(District.id == district_id))

    def add_district(self, district: District) -> District:
        self.db.add(district)
        self.db.flush()
        return district

    # ---------- Employees ----------
    def list_employees(
        self,
        *,
        company_id: UUID | None = None,
        main_district_id: UUID | None = None,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> list[Employee]:
        conditions = []
        if company_id is not None:
            conditions.append(Employee.company_id == company_id)
        if main_district_id is not None:
            conditions.append(Employee.main_district_id == main_district_id)
        if search:
            conditions.append(func.lower(Employee.full_name).contains(search.lower(), autoescape=True))
        if is_active is not None:
            conditions.append(Employee.is_active.is_(is_active))

        return self.db.scalars(select(Employee).where(*conditions).order_by(Employee.full_name.asc())).all()

    def get_employee(self, employee_id: UUID) -> Employee | None:
        return self.db.scalar(select(Employee).where(Employee.id == employee_id))

    def add_employee(self, employee: Employee) -> Employee:
        self.db.add(employee)
        self.db.flush()
        return employee

    # ---------- Stores ----------
    def list_stores(
        self,
        *,
        company_id: UUID | None = None,
        district_id: UUID | None = None,
        search: str | None = None,
        is_active: bool | None = None,
    ) -> list[Store]:
        conditions = []
        if company_id is not None:
            conditions.append(Store.company_id == company_id)
        if district_id is not None:
            conditions.append(Store.district_id == district_id)
        if search:
            conditions.append(func.lower(Store.name).contains(search.lower(), autoescape=True))
        if is_active is not None:
            conditions.append(Store.is_active.is_(is_active))

        return self.db.scalars(select(Store).where(*conditions).order_by(Store.name.asc())).all()

    def get_store(self, store_id: UUID) -> Store | None:
        return self.db.scalar(select(Store).where(Store.id == store_id))

    def add_store(self, store: Store) -> Store:
        self.db.add(store)
        self.db.flush()
        return store

    # ---------- Shift types ----------
    def list_shift_types(self, company_id: UUID) -> list[ShiftType]:
        return self.db.scalars(
            select(ShiftType).where(ShiftType.company_id == company_id).order_by(ShiftType.code.asc())
        ).all()

    def get_shift_type(self, shift_type_id: UUID) -> ShiftType | None:
        return self.db.scalar(select(ShiftType).where(ShiftType.id == shift_type_id))

    def get_shift_type_by_code(self, *, company_id: UUID, code: str) -> ShiftType | None:
        return self.db.scalar(
            select(ShiftType).where(and_(ShiftType.company_id == company_id, ShiftType.code == code))
        )

    def add_shift_type(self, shift_type: ShiftType) -> ShiftType:
        self.db.add(shift_type)
        self.db.flush()
        return shift_type

    # ---------- Assignments ----------
    def list_assignments_for_stores(
        self,
        store_ids: set[UUID],
        *,
        from_date: date,
        to_date: date,
    ) -> list[Assignment]:
        if not store_ids:
            return []
        return self.db.scalars(
            select(Assignment)
            .where(
                and_(
                    Assignment.store_id.in_(store_ids),
                    Assignment.date >= from_date,
                    Assignment.date <= to_date,
                )
            )
            .order_by(Assignment.date.asc(), Assignment.store_id.asc())
        ).all()

    def list_assignments_for_employees(
        self,
        employee_ids: set[UUID],
        *,
        from_date: date,
        to_date: date,
    ) -> list[Assignment]:
        if not employee_ids:
            return []
        return self.db.scalars(
            select(Assignment)
            .where(
                and_(
                    Assignment.employee_id.in_(employee_ids),
                    Assignment.date >= from_date,
                    Assignment.date <= to_date,
                )
            )
            .order_by(Assignment.date.asc(), Assignment.employee_id.asc())
        ).all()

    def list_assignments_for_store_day(self, *, store_id: UUID, day: date) -> list[Assignment]:
        return self.db.scalars(
            select(Assignment).where(and_(Assignment.store_id == store_id, Assignment.date == day))
        ).all()

    def get_assignment_for_employee_day(self, *, employee_id: UUID, day: date) -> Assignment | None:
        return self.db.scalar(
            select(Assignment).where(and_(Assignment.employee_id == employee_id, Assignment.date == day))
        )

    def add_assignment(self, assignment: Assignment) -> Assignment:
        self.db.add(assignment)
        self.db.flush()
        return assignment

    def delete_assignments_for_store_day(self, *, store_id: UUID, day: date) -> int:
        rows = self.list_assignments_for_store_day(store_id=store_id, day=day)
        for row in rows:
            self.db.delete(row)
        self.db.flush()
        return len(rows)
