"""Repository for shifts. Soft-deleted rows are invisible."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Query

from .base import BaseRepository
from ..exceptions import ShiftNotFoundError
from ..models.shift import Shift


class ShiftRepository(BaseRepository[Shift]):

    model_class = Shift
    not_found_error = ShiftNotFoundError

    def _base_query(self) -> Query:
        return self.db.query(Shift).filter(Shift.is_deleted.is_(False))

    def find_existing(self, project_id: str, employee_id: str, day: date) -> Optional[Shift]:
        return (
            self._base_query()
            .filter(
                Shift.project_id == project_id,
                Shift.employee_id == employee_id,
                Shift.date == day,
            )
            .first()
        )

    def list_for_project(
        self,
        project_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        shift_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Shift]:
        """Ordered by date, then day before night."""
        query = self._base_query().filter(Shift.project_id == project_id)
        if start_date:
            query = query.filter(Shift.date >= start_date)
        if end_date:
            query = query.filter(Shift.date <= end_date)
        if employee_id:
            query = query.filter(Shift.employee_id == employee_id)
        if shift_type:
            query = query.filter(Shift.shift_type == shift_type)
        if status:
            query = query.filter(Shift.status == status)
        return query.order_by(Shift.date, Shift.shift_type).all()
