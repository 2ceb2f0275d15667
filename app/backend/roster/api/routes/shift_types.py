"""Shift-type catalog endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from roster.db.dependencies import get_db_session
from roster.services.catalog_service import CatalogService, ShiftTypeCreateData, ShiftTypeUpdateData

router = APIRouter(tags=["shift-types"])


class ShiftTypeCreatePayload(BaseModel):
    code: str = Field(min_length=1, max_length=32)
    color_key: str | None = Field(default=None, max_length=32)


class ShiftTypeUpdatePayload(BaseModel):
    code: str | None = Field(default=None, min_length=1, max_length=32)
    color_key: str | None = Field(default=None, max_length=32)


def _catalog_service(db: Session) -> CatalogService:
    return CatalogService(db)


@router.get("/companies/{company_id}/shift-types")
def list_shift_types(company_id: UUID, db: Session = Depends(get_db_session)) -> dict[str, list[object]]:
    service = _catalog_service(db)
    return {"items": [service.serialize_shift_type(row) for row in service.list_shift_types(company_id)]}


@router.post("/companies/{company_id}/shift-types", status_code=status.HTTP_201_CREATED)
def create_shift_type(
    company_id: UUID,
    payload: ShiftTypeCreatePayload,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _catalog_service(db)
    shift_type = service.create_shift_type(
        company_id,
        ShiftTypeCreateData(code=payload.code, color_key=payload.color_key),
    )
    return service.serialize_shift_type(shift_type)


@router.patch("/shift-types/{shift_type_id}")
def update_shift_type(
    shift_type_id: UUID,
    payload: ShiftTypeUpdatePayload,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _catalog_service(db)
    shift_type = service.update_shift_type(
        shift_type_id,
        ShiftTypeUpdateData(
            code=payload.code,
            color_key=payload.color_key,
            clear_color_key="color_key" in payload.model_fields_set and payload.color_key is None,
        ),
    )
    return service.serialize_shift_type(shift_type)
