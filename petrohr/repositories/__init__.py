"""Data access repositories."""

from .base import BaseRepository
from .employee_repository import EmployeeRepository
from .project_repository import ProjectRepository
from .attendance_repository import AttendanceRepository
from .shift_repository import ShiftRepository

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "ProjectRepository",
    "AttendanceRepository",
    "ShiftRepository",
]
