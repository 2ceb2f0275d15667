"""Roster error taxonomy.

Every error is an ``HTTPException`` so services can raise it directly and
FastAPI renders it as ``{"detail": ...}`` for the active view.
"""

from __future__ import annotations

from fastapi import HTTPException, status


class ScopeLoadFailed(HTTPException):
    """A fetch in the scope load sequence failed or the district is missing."""

    def __init__(self, detail: str, *, status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE) -> None:
        super().__init__(status_code=status_code, detail=detail)


class DayNotEditable(HTTPException):
    """Cell date lies outside the store's open/close range."""

    def __init__(self, detail: str = "Store is not open on this date or is already closed.") -> None:
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class UnknownShiftType(HTTPException):
    """Selected shift-type code has no catalog entry."""

    def __init__(self, code: str) -> None:
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown shift type code: {code}." if code else "Shift type code is required.",
        )
        self.code = code


class WriteFailed(HTTPException):
    """Database rejected a delete/insert/update of an assignment."""

    def __init__(self, detail: str, *, status_code: int = status.HTTP_409_CONFLICT) -> None:
        super().__init__(status_code=status_code, detail=detail)
