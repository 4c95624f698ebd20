"""Project, assignment, attendance, and shift schemas."""

from datetime import date as CalendarDate, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..core.time_utils import compute_total_hours, validate_hhmm

AttendanceStatus = Literal["present", "absent", "late", "excused"]
ShiftType = Literal["day", "night"]
ShiftStatus = Literal["scheduled", "completed", "absent"]
AssignmentStatus = Literal["assigned", "in_operation", "completed"]


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def _optional_hhmm(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    return validate_hhmm(v)


# --- Projects ---

class ProjectCreate(_CamelModel):
    name: str
    description: Optional[str] = None
    location: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty")
        return v


class ProjectResponse(_CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None


class AssignmentCreate(_CamelModel):
    """Assign an employee to a project."""
    employee_id: str
    role: Optional[str] = None
    start_date: Optional[CalendarDate] = None
    end_date: Optional[CalendarDate] = None
    status: AssignmentStatus = "assigned"


class AssignmentResponse(_CamelModel):
    id: str
    project_id: str
    employee_id: str
    role: Optional[str] = None
    status: str
    start_date: Optional[CalendarDate] = None
    end_date: Optional[CalendarDate] = None
    assigned_by: Optional[str] = None
    assigned_at: Optional[datetime] = None


# --- Attendance ---

class AttendanceCreate(_CamelModel):
    employee_id: str
    date: CalendarDate
    status: AttendanceStatus = "present"
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('check_in_time', 'check_out_time')
    @classmethod
    def validate_times(cls, v: Optional[str]) -> Optional[str]:
        return _optional_hhmm(v)


class AttendanceUpdate(_CamelModel):
    """Editable attendance fields. Project, employee and recorder are fixed."""
    date: Optional[CalendarDate] = None
    status: Optional[AttendanceStatus] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('check_in_time', 'check_out_time')
    @classmethod
    def validate_times(cls, v: Optional[str]) -> Optional[str]:
        return _optional_hhmm(v)


class AttendanceResponse(_CamelModel):
    id: str
    project_id: str
    employee_id: str
    date: CalendarDate
    status: str
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    total_hours: Optional[float] = None
    notes: str = ""
    recorded_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Shifts ---

class ShiftCreate(_CamelModel):
    employee_id: str
    date: CalendarDate
    shift_type: ShiftType = Field(alias="type")
    start_time: str
    end_time: str
    status: ShiftStatus = "scheduled"
    notes: Optional[str] = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_times(cls, v: str) -> str:
        return validate_hhmm(v)


class ShiftUpdate(_CamelModel):
    date: Optional[CalendarDate] = None
    shift_type: Optional[ShiftType] = Field(default=None, alias="type")
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: Optional[ShiftStatus] = None
    notes: Optional[str] = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_times(cls, v: Optional[str]) -> Optional[str]:
        return _optional_hhmm(v)


class ShiftResponse(_CamelModel):
    id: str
    project_id: str
    employee_id: str
    date: CalendarDate
    shift_type: str = Field(alias="type")
    start_time: str
    end_time: str
    duration_hours: Optional[float] = None
    status: str
    notes: str = ""
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def fill_duration(self) -> "ShiftResponse":
        if self.duration_hours is None:
            self.duration_hours = compute_total_hours(self.start_time, self.end_time)
        return self
