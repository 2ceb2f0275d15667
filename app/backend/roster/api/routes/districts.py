"""Company and district endpoints, including the monthly district grids."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from roster.db.dependencies import get_db_session
from roster.services.catalog_service import CatalogService
from roster.services.roster_service import GridScope, RosterService

router = APIRouter(tags=["districts"])


class CompanyCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class DistrictCreatePayload(BaseModel):
    company_id: UUID
    name: str = Field(min_length=1, max_length=255)


def _catalog_service(db: Session) -> CatalogService:
    return CatalogService(db)


def _roster_service(db: Session) -> RosterService:
    return RosterService(db)


@router.get("/companies")
def list_companies(db: Session = Depends(get_db_session)) -> dict[str, list[object]]:
    service = _catalog_service(db)
    return {"items": [service.serialize_company(company) for company in service.list_companies()]}


@router.post("/companies", status_code=status.HTTP_201_CREATED)
def create_company(payload: CompanyCreatePayload, db: Session = Depends(get_db_session)) -> dict[str, object]:
    service = _catalog_service(db)
    return service.serialize_company(service.create_company(name=payload.name))


@router.get("/districts")
def list_districts(
    company_id: UUID | None = None,
    db: Session = Depends(get_db_session),
) -> dict[str, list[object]]:
    service = _catalog_service(db)
    items = service.list_districts(company_id=company_id)
    return {"items": [service.serialize_district(district) for district in items]}


@router.post("/districts", status_code=status.HTTP_201_CREATED)
def create_district(payload: DistrictCreatePayload, db: Session = Depends(get_db_session)) -> dict[str, object]:
    service = _catalog_service(db)
    district = service.create_district(company_id=payload.company_id, name=payload.name)
    return service.serialize_district(district)


@router.get("/districts/{district_id}")
def get_district(district_id: UUID, db: Session = Depends(get_db_session)) -> dict[str, object]:
    service = _catalog_service(db)
    return service.serialize_district(service.get_district(district_id))


@router.get("/districts/{district_id}/grid")
def get_district_grid(
    district_id: UUID,
    year: int = Query(ge=1, le=9999),
    month: int = Query(ge=1, le=12),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _roster_service(db)
    return service.read_district_grid(GridScope(district_id=district_id, year=year, month=month))


@router.get("/districts/{district_id}/summary")
def get_district_summary(
    district_id: UUID,
    year: int = Query(ge=1, le=9999),
    month: int = Query(ge=1, le=12),
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _roster_service(db)
    return service.read_district_summary(GridScope(district_id=district_id, year=year, month=month))
