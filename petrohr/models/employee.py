"""Employee aggregate: identity, contact fields, and the embedded folder tree."""

import uuid

from sqlalchemy import JSON, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.sql import func
from ..database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Employee(Base):
    """One employee and everything filed under them.

    ``folders`` holds the whole folder/document tree as JSON (root folders,
    each with ``documents`` and nested ``subfolders``). The tree is always
    replaced as a unit, never patched in place, so ``version`` detects
    concurrent saves of the same aggregate.
    """

    __tablename__ = "employees"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50), nullable=True)
    position = Column(String(255), nullable=True)
    department = Column(String(255), nullable=False, default="")
    hire_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="active")

    profile_image = Column(Text, nullable=True)
    profile_image_public_id = Column(Text, nullable=True)

    folders = Column(JSON, nullable=False, default=list)

    # Optimistic concurrency token, bumped by SQLAlchemy on every UPDATE.
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}
