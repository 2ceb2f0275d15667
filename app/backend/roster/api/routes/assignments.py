"""Single-cell assignment endpoints of the store grid."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from roster.db.dependencies import get_db_session
from roster.services.roster_service import CellEditInput, RosterService

router = APIRouter(tags=["assignments"])


class CellEditPayload(BaseModel):
    employee_id: UUID | None = None
    shift_type_code: str | None = Field(default=None, max_length=32)
    is_substitution: bool = False


def _roster_service(db: Session) -> RosterService:
    return RosterService(db)


@router.get("/stores/{store_id}/days/{day}/assignment")
def get_cell_assignment(
    store_id: UUID,
    day: date,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _roster_service(db)
    return service.read_cell(store_id=store_id, day=day)


@router.put("/stores/{store_id}/days/{day}/assignment")
def put_cell_assignment(
    store_id: UUID,
    day: date,
    payload: CellEditPayload,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _roster_service(db)
    return service.save_cell(
        store_id=store_id,
        day=day,
        data=CellEditInput(
            employee_id=payload.employee_id,
            shift_type_code=payload.shift_type_code,
            is_substitution=payload.is_substitution,
        ),
    )


@router.delete("/stores/{store_id}/days/{day}/assignment")
def delete_cell_assignment(
    store_id: UUID,
    day: date,
    db: Session = Depends(get_db_session),
) -> dict[str, object]:
    service = _roster_service(db)
    return service.clear_cell(store_id=store_id, day=day)
