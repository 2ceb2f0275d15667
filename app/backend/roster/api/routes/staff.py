"""Employee (staff) catalog endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from roster.db.dependencies import get_db_session
from roster.services.catalog_service import (
    CatalogService,
    EmployeeCreateData,
    EmployeeUpdateData,
    StatusFilter,
)

router = APIRouter(tags=["staff"])


class EmployeeCreatePayload(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    main_district_id: UUID
    is_active: bool = True


class EmployeeUpdatePayload(BaseModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    main_district_id: UUID | None = None
    is_active: bool | None = None


def _catalog_service(db: Session) -> CatalogService:
    return CatalogService(db)


@router.get("/employees")
def list_employees(
    search: str | None = None,
    district_id: UUID | None = None,
    status_filter: StatusFilter = Query(default=StatusFilter.ALL, alias="status"),
    db: Session = Depends(get_db_session),
) -> dict[str, list[object]]:
    service = _catalog_service(db)
    items = service.list_employees(search=search, district_id=district_id, status_filter=status_filter)
    return {"items": [service.serialize_employee(employee) for employee in items]}


@router.post("/employees", status_code=status.HTTP_201_CREATED)
def create_employee(payload: EmployeeCreatePayload, db: Session = Depends(get_db_session)) -> dict[str, object]:
    service = _catalog_service(db)
    employee = service.create_employee(
        EmployeeCreateData(
            full_name=payload.full_name,
            main_district_id=payload.main_district_id,
            is_active=payload.is_active,
        )
    )
    return service.serialize_employee(employee)


@router.patch("/employees/{employee_id}")
def update_employee(
    employee_id: UUID,
    payload: EmployeeUpdatePayload,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _catalog_service(db)
    employee = service.update_employee(
        employee_id,
        EmployeeUpdateData(
            full_name=payload.full_name,
            main_district_id=payload.main_district_id,
            is_active=payload.is_active,
        ),
    )
    return service.serialize_employee(employee)
