"""ORM model package."""

from roster.models.entities import (
    Assignment,
    ColorKey,
    Company,
    District,
    Employee,
    ShiftType,
    Store,
)

__all__ = [
    "Assignment",
    "ColorKey",
    "Company",
    "District",
    "Employee",
    "ShiftType",
    "Store",
]
