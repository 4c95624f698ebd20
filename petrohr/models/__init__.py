"""Database models."""

from .employee import Employee
from .project import Project, ProjectAssignment
from .attendance import EmployeeAttendance
from .shift import Shift

__all__ = [
    "Employee",
    "Project", "ProjectAssignment",
    "EmployeeAttendance",
    "Shift",
]
