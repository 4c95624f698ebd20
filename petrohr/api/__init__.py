"""API routes."""

from .employees import router as employees_router
from .folders import router as folders_router
from .projects import router as projects_router
from .attendance import router as attendance_router
from .shifts import router as shifts_router

__all__ = [
    "employees_router",
    "folders_router",
    "projects_router",
    "attendance_router",
    "shifts_router",
]
