"""Pydantic schemas for API validation."""

from .folder import (
    Folder,
    FolderDocument,
    FolderCreate,
    FolderRename,
    DocumentDeleteRequest,
    DocumentUploadResponse,
)
from .employee import (
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
)
from .scheduling import (
    ProjectCreate,
    ProjectResponse,
    AssignmentCreate,
    AssignmentResponse,
    AttendanceCreate,
    AttendanceUpdate,
    AttendanceResponse,
    ShiftCreate,
    ShiftUpdate,
    ShiftResponse,
)

__all__ = [
    "Folder",
    "FolderDocument",
    "FolderCreate",
    "FolderRename",
    "DocumentDeleteRequest",
    "DocumentUploadResponse",
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",
    "ProjectCreate",
    "ProjectResponse",
    "AssignmentCreate",
    "AssignmentResponse",
    "AttendanceCreate",
    "AttendanceUpdate",
    "AttendanceResponse",
    "ShiftCreate",
    "ShiftUpdate",
    "ShiftResponse",
]
