"""Top-level API router."""

from fastapi import APIRouter

from roster.api.routes.assignments import router as assignments_router
from roster.api.routes.districts import router as districts_router
from roster.api.routes.health import router as health_router
from roster.api.routes.shift_types import router as shift_types_router
from roster.api.routes.staff import router as staff_router
from roster.api.routes.stores import router as stores_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(districts_router)
api_router.include_router(assignments_router)
api_router.include_router(staff_router)
api_router.include_router(stores_router)
api_router.include_router(shift_types_router)
