"""Custom exception hierarchy for the HR service."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Employee record errors
    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    PARENT_FOLDER_NOT_FOUND = "PARENT_FOLDER_NOT_FOUND"

    # Project operation errors
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    ATTENDANCE_NOT_FOUND = "ATTENDANCE_NOT_FOUND"
    SHIFT_NOT_FOUND = "SHIFT_NOT_FOUND"

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"

    # Object storage
    STORAGE_ERROR = "STORAGE_ERROR"

    # Auth
    UNAUTHORIZED = "UNAUTHORIZED"

    # Concurrency errors
    CONFLICT = "CONFLICT"


class PetroException(Exception):
    """
    Base exception for all service errors.

    Carries everything the exception handler needs to build a response:
    a human-readable message, a machine-readable code, the HTTP status, and
    optional details.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as the JSON error body: error, message, details."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class EmployeeNotFoundError(PetroException):
    """Employee not found in database."""

    def __init__(self, employee_id: str):
        super().__init__(
            f"Employee not found: {employee_id}",
            ErrorCode.EMPLOYEE_NOT_FOUND,
            status_code=404,
            details={"employee_id": employee_id}
        )


class FolderNotFoundError(PetroException):
    """No folder with this id anywhere in the employee's tree."""

    def __init__(self, folder_id: str):
        super().__init__(
            f"Folder not found: {folder_id}",
            ErrorCode.FOLDER_NOT_FOUND,
            status_code=404,
            details={"folder_id": folder_id}
        )


class ParentFolderNotFoundError(PetroException):
    """The requested parent of a new folder does not exist in the tree."""

    def __init__(self, parent_id: str):
        super().__init__(
            f"Parent folder not found: {parent_id}",
            ErrorCode.PARENT_FOLDER_NOT_FOUND,
            status_code=404,
            details={"parent_id": parent_id}
        )


class ProjectNotFoundError(PetroException):
    """Project not found in database."""

    def __init__(self, project_id: str):
        super().__init__(
            f"Project not found: {project_id}",
            ErrorCode.PROJECT_NOT_FOUND,
            status_code=404,
            details={"project_id": project_id}
        )


class AttendanceNotFoundError(PetroException):
    """Attendance record missing or soft-deleted."""

    def __init__(self, attendance_id: str):
        super().__init__(
            f"Attendance record not found: {attendance_id}",
            ErrorCode.ATTENDANCE_NOT_FOUND,
            status_code=404,
            details={"attendance_id": attendance_id}
        )


class ShiftNotFoundError(PetroException):
    """Shift missing or soft-deleted."""

    def __init__(self, shift_id: str):
        super().__init__(
            f"Shift not found: {shift_id}",
            ErrorCode.SHIFT_NOT_FOUND,
            status_code=404,
            details={"shift_id": shift_id}
        )


class ValidationError(PetroException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class DuplicateRecordError(PetroException):
    """A record with the same natural key already exists."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            ErrorCode.DUPLICATE_RECORD,
            status_code=400,
            details=details
        )


class StorageError(PetroException):
    """The object store rejected an upload or delete."""

    def __init__(self, message: str, public_id: Optional[str] = None):
        details = {"public_id": public_id} if public_id else {}
        super().__init__(
            message,
            ErrorCode.STORAGE_ERROR,
            status_code=502,
            details=details
        )


class AuthenticationError(PetroException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class ConflictError(PetroException):
    """The employee record changed between read and save."""

    def __init__(self, employee_id: str, message: str = "Employee record was modified concurrently"):
        super().__init__(
            message,
            ErrorCode.CONFLICT,
            status_code=409,
            details={"employee_id": employee_id}
        )
