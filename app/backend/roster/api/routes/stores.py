"""Store catalog endpoints."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from roster.db.dependencies import get_db_session
from roster.services.catalog_service import (
    CatalogService,
    StatusFilter,
    StoreCreateData,
    StoreUpdateData,
)

router = APIRouter(tags=["stores"])


class StoreCreatePayload(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    district_id: UUID
    is_active: bool = True
    opened_at: date | None = None
    closed_at: date | None = None


class StoreUpdatePayload(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    district_id: UUID | None = None
    is_active: bool | None = None
    # An explicit null clears the bound.
    opened_at: date | None = None
    closed_at: date | None = None


def _catalog_service(db: Session) -> CatalogService:
    return CatalogService(db)


@router.get("/stores")
def list_stores(
    search: str | None = None,
    district_id: UUID | None = None,
    status_filter: StatusFilter = Query(default=StatusFilter.ALL, alias="status"),
    db: Session = Depends(get_db_session),
) -> dict[str, list[object]]:
    service = _catalog_service(db)
    items = service.list_stores(search=search, district_id=district_id, status_filter=status_filter)
    return {"items": [service.serialize_store(store) for store in items]}


@router.post("/stores", status_code=status.HTTP_201_CREATED)
def create_store(payload: StoreCreatePayload, db: Session = Depends(get_db_session)) -> dict[str, object]:
    service = _catalog_service(db)
    store = service.create_store(
        StoreCreateData(
            name=payload.name,
            district_id=payload.district_id,
            is_active=payload.is_active,
            opened_at=payload.opened_at,
            closed_at=payload.closed_at,
        )
    )
    return service.serialize_store(store)


@router.patch("/stores/{store_id}")
def update_store(
    store_id: UUID,
    payload: StoreUpdatePayload,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _catalog_service(db)
    provided = payload.model_fields_set
    store = service.update_store(
        store_id,
        StoreUpdateData(
            name=payload.name,
            district_id=payload.district_id,
            is_active=payload.is_active,
            opened_at=payload.opened_at,
            closed_at=payload.closed_at,
            clear_opened_at="opened_at" in provided and payload.opened_at is None,
            clear_closed_at="closed_at" in provided and payload.closed_at is None,
        ),
    )
    return service.serialize_store(store)
