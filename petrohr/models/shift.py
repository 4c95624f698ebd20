"""Planned day/night shifts."""

import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.sql import func
from ..database import Base


class Shift(Base):
    """A scheduled shift of one employee on a project."""

    __tablename__ = "shifts"
    __table_args__ = (
        Index("ix_shifts_project_date", "project_id", "date"),
        Index("ix_shifts_employee_id", "employee_id"),
        Index("ix_shifts_date_type", "date", "type"),
    )

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(String(32), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    shift_type = Column("type", String(10), nullable=False)  # 'day' or 'night'
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)
    status = Column(String(20), nullable=False, default="scheduled")
    notes = Column(Text, nullable=False, default="")
    created_by = Column(String(64), nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
