"""Employee schemas."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .folder import Folder


class EmployeeBase(BaseModel):
    """Profile fields shared by create and response."""
    name: str
    email: str
    phone: Optional[str] = None
    position: Optional[str] = None
    department: str = ""
    hire_date: Optional[date] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class EmployeeCreate(EmployeeBase):
    """Profile fields of a new hire record."""

    @field_validator('name', 'email')
    @classmethod
    def validate_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v.lower()


class EmployeeUpdate(BaseModel):
    """Profile edit. Only fields that are set are applied."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    status: Optional[str] = None

    @field_validator('name', 'email')
    @classmethod
    def validate_required(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and "@" not in v:
            raise ValueError("Invalid email address")
        return v.lower() if v else v

    @field_validator('status')
    @classmethod
    def validate_status(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in ("active", "inactive"):
            raise ValueError("Status must be 'active' or 'inactive'")
        return v


class EmployeeResponse(EmployeeBase):
    """Employee with its full folder tree, as served and as cached."""
    id: str
    status: str
    profile_image: Optional[str] = None
    profile_image_public_id: Optional[str] = None
    folders: List[Folder] = Field(default_factory=list)
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
