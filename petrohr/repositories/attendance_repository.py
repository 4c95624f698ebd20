"""Repository for attendance records. Soft-deleted rows are invisible."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Query

from .base import BaseRepository
from ..exceptions import AttendanceNotFoundError
from ..models.attendance import EmployeeAttendance


class AttendanceRepository(BaseRepository[EmployeeAttendance]):

    model_class = EmployeeAttendance
    not_found_error = AttendanceNotFoundError

    def _base_query(self) -> Query:
        return self.db.query(EmployeeAttendance).filter(EmployeeAttendance.is_deleted.is_(False))

    def find_existing(self, project_id: str, employee_id: str, day: date) -> Optional[EmployeeAttendance]:
        """Live record for the same project, employee and date, if any."""
        return (
            self._base_query()
            .filter(
                EmployeeAttendance.project_id == project_id,
                EmployeeAttendance.employee_id == employee_id,
                EmployeeAttendance.date == day,
            )
            .first()
        )

    def list_for_project(
        self,
        project_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[EmployeeAttendance]:
        """Newest first."""
        query = self._base_query().filter(EmployeeAttendance.project_id == project_id)
        if start_date:
            query = query.filter(EmployeeAttendance.date >= start_date)
        if end_date:
            query = query.filter(EmployeeAttendance.date <= end_date)
        if employee_id:
            query = query.filter(EmployeeAttendance.employee_id == employee_id)
        if status:
            query = query.filter(EmployeeAttendance.status == status)
        return query.order_by(EmployeeAttendance.date.desc(), EmployeeAttendance.created_at.desc()).all()
