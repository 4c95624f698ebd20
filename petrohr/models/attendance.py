"""Daily attendance of an employee on a project."""

import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.sql import func
from ..database import Base


class EmployeeAttendance(Base):
    """Attendance record. Unique per (project, employee, date) among live rows,
    enforced by the service, not by a constraint."""

    __tablename__ = "employee_attendance"
    __table_args__ = (
        Index("ix_attendance_project_date", "project_id", "date"),
        Index("ix_attendance_employee_id", "employee_id"),
        Index("ix_attendance_date_status", "date", "status"),
    )

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(String(32), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="present")
    check_in_time = Column(String(5), nullable=True)  # HH:MM
    check_out_time = Column(String(5), nullable=True)
    total_hours = Column(Float, nullable=True)
    notes = Column(Text, nullable=False, default="")
    recorded_by = Column(String(64), nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
