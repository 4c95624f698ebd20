"""Projects and the employees assigned to them."""

import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Project(Base):
    """A field project that employees are assigned to."""

    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employees = relationship(
        "ProjectAssignment",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectAssignment.assigned_at",
    )


class ProjectAssignment(Base):
    """Membership of one employee in one project."""

    __tablename__ = "project_assignments"
    __table_args__ = (
        UniqueConstraint("project_id", "employee_id", name="uq_project_assignment"),
        Index("ix_project_assignments_employee_id", "employee_id"),
    )

    id = Column(String(32), primary_key=True, default=_new_id)
    project_id = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(String(32), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    role = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="assigned")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    assigned_by = Column(String(64), nullable=True)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now())

    project = relationship("Project", back_populates="employees")
