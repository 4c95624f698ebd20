"""Business logic services."""

from .attendance_service import AttendanceService
from .employee_cache import EmployeeCache
from .employee_service import EmployeeService
from .folder_service import FolderService
from .folder_tree import FolderTree
from .project_events import ProjectEventPublisher
from .project_service import ProjectService
from .shift_service import ShiftService
from .storage_service import DocumentStorage, IncomingFile, UploadResult

__all__ = [
    "AttendanceService",
    "DocumentStorage",
    "EmployeeCache",
    "EmployeeService",
    "FolderService",
    "FolderTree",
    "IncomingFile",
    "ProjectEventPublisher",
    "ProjectService",
    "ShiftService",
    "UploadResult",
]
