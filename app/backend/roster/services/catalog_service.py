"""Application service for company, district, staff, store and shift-type catalogs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roster.models.entities import Company, District, Employee, ShiftType, Store
from roster.repositories.roster_repository import RosterRepository
from roster.services.roster_rules import COLOR_KEYS

logger = logging.getLogger(__name__)


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"

    @property
    def is_active(self) -> bool | None:
        if self is StatusFilter.ACTIVE:
            return True
        if self is StatusFilter.INACTIVE:
            return False
        return None


@dataclass(slots=True)
class EmployeeCreateData:
    full_name: str
    main_district_id: UUID
    is_active: bool = True


@dataclass(slots=True)
class EmployeeUpdateData:
    full_name: str | None = None
    main_district_id: UUID | None = None
    is_active: bool | None = None


@dataclass(slots=True)
class StoreCreateData:
    name: str
    district_id: UUID
    is_active: bool = True
    opened_at: date | None = None
    closed_at: date | None = None


@dataclass(slots=True)
class StoreUpdateData:
    name: str | None = None
    district_id: UUID | None = None
    is_active: bool | None = None
    opened_at: date | None = None
    closed_at: date | None = None
    clear_opened_at: bool = False
    clear_closed_at: bool = False


@dataclass(slots=True)
class ShiftTypeCreateData:
    code: str
    color_key: str | None = None


@dataclass(slots=True)
class ShiftTypeUpdateData:
    code: str | None = None
    color_key: str | None = None
    clear_color_key: bool = False


def _ensure_lifetime_order(opened_at: date | None, closed_at: date | None) -> None:
    if opened_at is not None and closed_at is not None and opened_at > closed_at:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="opened_at must be less than or equal to closed_at.",
        )


def _ensure_color_key(color_key: str | None) -> None:
    if color_key is not None and color_key not in COLOR_KEYS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"color_key must be one of: {', '.join(sorted(COLOR_KEYS))}.",
        )


class CatalogService:
    """Reference data management; rows here are edited rarely."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = RosterRepository(db)

    # ---------- Serialization ----------
    @staticmethod
    def serialize_company(company: Company) -> dict[str, object]:
        return {"id": str(company.id), "name": company.name}

    @staticmethod
    def serialize_district(district: District) -> dict[str, object]:
        return {
            "id": str(district.id),
            "name": district.name,
            "company_id": str(district.company_id),
        }

    @staticmethod
    def serialize_employee(employee: Employee) -> dict[str, object]:
        return {
            "id": str(employee.id),
            "full_name": employee.full_name,
            "main_district_id": str(employee.main_district_id) if employee.main_district_id else None,
            "is_active": employee.is_active,
            "company_id": str(employee.company_id),
        }

    @staticmethod
    def serialize_store(store: Store) -> dict[str, object]:
        return {
            "id": str(store.id),
            "name": store.name,
            "district_id": str(store.district_id),
            "company_id": str(store.company_id),
            "is_active": store.is_active,
            "opened_at": store.opened_at.isoformat() if store.opened_at else None,
            "closed_at": store.closed_at.isoformat() if store.closed_at else None,
        }

    @staticmethod
    def serialize_shift_type(shift_type: ShiftType) -> dict[str, object]:
        return {
            "id": str(shift_type.id),
            "code": shift_type.code,
            "color_key": shift_type.color_key,
            "company_id": str(shift_type.company_id),
        }

    # ---------- Lookups ----------
    def _get_company(self, company_id: UUID) -> Company:
        company = self.repo.get_company(company_id)
        if company is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Company not found.")
        return company

    def _resolve_district(self, district_id: UUID) -> District:
        district = self.repo.get_district(district_id)
        if district is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Unknown district.",
            )
        return district

    # ---------- Companies ----------
    def list_companies(self) -> list[Company]:
        return self.repo.list_companies()

    def create_company(self, *, name: str) -> Company:
        company = Company(name=name.strip())
        self.repo.add_company(company)
        self.db.commit()
        self.db.refresh(company)
        return company

    # ---------- Districts ----------
    def list_districts(self, *, company_id: UUID | None = None) -> list[District]:
        return self.repo.list_districts(company_id=company_id)

    def get_district(self, district_id: UUID) -> District:
        district = self.repo.get_district(district_id)
        if district is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="District not found.")
        return district

    def create_district(self, *, company_id: UUID, name: str) -> District:
        self._get_company(company_id)
        district = District(company_id=company_id, name=name.strip())
        self.repo.add_district(district)
        self.db.commit()
        self.db.refresh(district)
        return district

    # ---------- Employees ----------
    def list_employees(
        self,
        *,
        search: str | None = None,
        district_id: UUID | None = None,
        status_filter: StatusFilter = StatusFilter.ALL,
    ) -> list[Employee]:
        return self.repo.list_employees(
            main_district_id=district_id,
            search=search.strip() if search else None,
            is_active=status_filter.is_active,
        )

    def create_employee(self, data: EmployeeCreateData) -> Employee:
        district = self._resolve_district(data.main_district_id)
        employee = Employee(
            company_id=district.company_id,
            full_name=data.full_name.strip(),
            main_district_id=district.id,
            is_active=data.is_active,
        )
        self.repo.add_employee(employee)
        self.db.commit()
        self.db.refresh(employee)
        logger.info("Created employee %s in district %s", employee.id, district.id)
        return employee

    def update_employee(self, employee_id: UUID, data: EmployeeUpdateData) -> Employee:
        employee = self.repo.get_employee(employee_id)
        if employee is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found.")

        if data.main_district_id is not None:
            district = self._resolve_district(data.main_district_id)
            if district.company_id != employee.company_id:
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail="main_district_id must reference a district of the employee's company.",
                )
            employee.main_district_id = district.id
        if data.full_name is not None:
            employee.full_name = data.full_name.strip()
        if data.is_active is not None:
            employee.is_active = data.is_active

        self.db.commit()
        self.db.refresh(employee)
        return employee

    # ---------- Stores ----------
    def list_stores(
        self,
        *,
        search: str | None = None,
        district_id: UUID | None = None,
        status_filter: StatusFilter = StatusFilter.ALL,
    ) -> list[Store]:
        return self.repo.list_stores(
            district_id=district_id,
            search=search.strip() if search else None,
            is_active=status_filter.is_active,
        )

    def create_store(self, data: StoreCreateData) -> Store:
        district = self._resolve_district(data.district_id)
        _ensure_lifetime_order(data.opened_at, data.closed_at)

        store = Store(
            company_id=district.company_id,
            district_id=district.id,
            name=data.name.strip(),
            is_active=data.is_active,
            opened_at=data.opened_at,
            closed_at=data.closed_at,
        )
        self.repo.add_store(store)
        self.db.commit()
        self.db.refresh(store)
        logger.info("Created store %s in district %s", store.id, district.id)
        return store

    def update_store(self, store_id: UUID, data: StoreUpdateData) -> Store:
        store = self.repo.get_store(store_id)
        if store is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found.")

        opened_at = None if data.clear_opened_at else (data.opened_at or store.opened_at)
        closed_at = None if data.clear_closed_at else (data.closed_at or store.closed_at)
        _ensure_lifetime_order(opened_at, closed_at)

        if data.district_id is not None:
            district = self._resolve_district(data.district_id)
            if district.company_id != store.company_id:
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail="district_id must reference a district of the store's company.",
                )
            store.district_id = district.id
        if data.name is not None:
            store.name = data.name.strip()
        if data.is_active is not None:
            store.is_active = data.is_active
        store.opened_at = opened_at
        store.closed_at = closed_at

        self.db.commit()
        self.db.refresh(store)
        return store

    # ---------- Shift types ----------
    def list_shift_types(self, company_id: UUID) -> list[ShiftType]:
        self._get_company(company_id)
        return self.repo.list_shift_types(company_id)

    def create_shift_type(self, company_id: UUID, data: ShiftTypeCreateData) -> ShiftType:
        self._get_company(company_id)
        _ensure_color_key(data.color_key)

        shift_type = ShiftType(company_id=company_id, code=data.code.strip(), color_key=data.color_key)
        try:
            self.repo.add_shift_type(shift_type)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Shift type code already exists in this company.",
            ) from exc

        self.db.refresh(shift_type)
        return shift_type

    def update_shift_type(self, shift_type_id: UUID, data: ShiftTypeUpdateData) -> ShiftType:
        shift_type = self.repo.get_shift_type(shift_type_id)
        if shift_type is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift type not found.")

        _ensure_color_key(data.color_key)
        if data.code is not None:
            shift_type.code = data.code.strip()
        if data.clear_color_key:
            shift_type.color_key = None
        elif data.color_key is not None:
            shift_type.color_key = data.color_key

        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Shift type code already exists in this company.",
            ) from exc

        self.db.refresh(shift_type)
        return shift_type
