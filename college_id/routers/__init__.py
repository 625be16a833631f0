from fastapi import APIRouter

from .health import health_router, root_router
from .students import students_router

main_router = APIRouter()

# Include sub-routers
main_router.include_router(students_router, prefix="/students", tags=["Students"])
main_router.include_router(health_router, prefix="/health", tags=["Health Checks"])

__all__ = ["main_router", "root_router"]
