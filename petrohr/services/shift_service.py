"""Day and night shifts on a project."""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from .project_events import SHIFT_UPDATE, ProjectEventPublisher
from .project_service import ProjectService
from ..exceptions import DuplicateRecordError, ShiftNotFoundError
from ..models.shift import Shift
from ..repositories.employee_repository import EmployeeRepository
from ..repositories.shift_repository import ShiftRepository
from ..schemas.scheduling import ShiftCreate, ShiftResponse, ShiftUpdate

logger = logging.getLogger(__name__)


class ShiftService:
    """Shift CRUD scoped to one project. One live shift per employee per day."""

    def __init__(self, db: Session, events: ProjectEventPublisher):
        self.db = db
        self.repo = ShiftRepository(db)
        self.employee_repo = EmployeeRepository(db)
        self.projects = ProjectService(db)
        self.events = events

    def list(
        self,
        project_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        shift_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Shift]:
        self.projects.get(project_id)
        return self.repo.list_for_project(
            project_id, start_date, end_date, employee_id, shift_type, status
        )

    def create(self, project_id: str, data: ShiftCreate, created_by: str) -> Shift:
        self.projects.get(project_id)
        self.employee_repo.get_by_id(data.employee_id)
        self.projects.ensure_assigned(project_id, data.employee_id)

        if self.repo.find_existing(project_id, data.employee_id, data.date) is not None:
            raise DuplicateRecordError(
                "A shift already exists for this employee on this date",
                details={"employee_id": data.employee_id, "date": data.date.isoformat()},
            )

        shift = Shift(
            project_id=project_id,
            employee_id=data.employee_id,
            date=data.date,
            shift_type=data.shift_type,
            start_time=data.start_time,
            end_time=data.end_time,
            status=data.status,
            notes=data.notes or "",
            created_by=created_by,
        )
        self.repo.add(shift)
        logger.info(
            "Shift scheduled",
            extra={"project_id": project_id, "employee_id": data.employee_id, "shift_id": shift.id},
        )
        self._publish(project_id, "create", shift)
        return shift

    def update(self, project_id: str, shift_id: str, data: ShiftUpdate) -> Shift:
        shift = self._get_in_project(project_id, shift_id)

        changes = data.model_dump(exclude_unset=True)
        new_date = changes.get("date")
        if new_date is not None and new_date != shift.date:
            clash = self.repo.find_existing(project_id, shift.employee_id, new_date)
            if clash is not None and clash.id != shift.id:
                raise DuplicateRecordError(
                    "A shift already exists for this employee on this date",
                    details={"employee_id": shift.employee_id, "date": new_date.isoformat()},
                )

        for field, value in changes.items():
            if field == "notes":
                value = value or ""
            elif value is None:
                continue
            setattr(shift, field, value)

        self.db.commit()
        self.db.refresh(shift)
        logger.info("Shift updated", extra={"project_id": project_id, "shift_id": shift_id})
        self._publish(project_id, "update", shift)
        return shift

    def delete(self, project_id: str, shift_id: str) -> None:
        shift = self._get_in_project(project_id, shift_id)
        shift.is_deleted = True
        self.db.commit()
        logger.info("Shift deleted", extra={"project_id": project_id, "shift_id": shift_id})
        self.events.publish(project_id, SHIFT_UPDATE, "delete", shiftId=shift_id)

    def _get_in_project(self, project_id: str, shift_id: str) -> Shift:
        self.projects.get(project_id)
        shift = self.repo.get_by_id(shift_id)
        if shift.project_id != project_id:
            raise ShiftNotFoundError(shift_id)
        return shift

    def _publish(self, project_id: str, action: str, shift: Shift) -> None:
        payload = ShiftResponse.model_validate(shift).model_dump(mode="json", by_alias=True)
        self.events.publish(project_id, SHIFT_UPDATE, action, shift=payload)
