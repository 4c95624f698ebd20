"""Daily attendance on a project."""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from .project_events import ATTENDANCE_UPDATE, ProjectEventPublisher
from .project_service import ProjectService
from ..core.time_utils import compute_total_hours
from ..exceptions import AttendanceNotFoundError, DuplicateRecordError
from ..models.attendance import EmployeeAttendance
from ..repositories.attendance_repository import AttendanceRepository
from ..repositories.employee_repository import EmployeeRepository
from ..schemas.scheduling import AttendanceCreate, AttendanceResponse, AttendanceUpdate

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance CRUD scoped to one project.

    Records are unique per (project, employee, date) among rows that are not
    soft-deleted. The check is a query before insert.
    """

    def __init__(self, db: Session, events: ProjectEventPublisher):
        self.db = db
        self.repo = AttendanceRepository(db)
        self.employee_repo = EmployeeRepository(db)
        self.projects = ProjectService(db)
        self.events = events

    def list(
        self,
        project_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[EmployeeAttendance]:
        self.projects.get(project_id)
        return self.repo.list_for_project(project_id, start_date, end_date, employee_id, status)

    def create(self, project_id: str, data: AttendanceCreate, recorded_by: str) -> EmployeeAttendance:
        self.projects.get(project_id)
        self.employee_repo.get_by_id(data.employee_id)
        self.projects.ensure_assigned(project_id, data.employee_id)

        if self.repo.find_existing(project_id, data.employee_id, data.date) is not None:
            raise DuplicateRecordError(
                "Attendance already exists for this employee on this date",
                details={"employee_id": data.employee_id, "date": data.date.isoformat()},
            )

        record = EmployeeAttendance(
            project_id=project_id,
            employee_id=data.employee_id,
            date=data.date,
            status=data.status,
            check_in_time=data.check_in_time,
            check_out_time=data.check_out_time,
            total_hours=compute_total_hours(data.check_in_time, data.check_out_time),
            notes=data.notes or "",
            recorded_by=recorded_by,
        )
        self.repo.add(record)
        logger.info(
            "Attendance recorded",
            extra={"project_id": project_id, "employee_id": data.employee_id, "attendance_id": record.id},
        )
        self._publish(project_id, "create", record)
        return record

    def update(
        self, project_id: str, attendance_id: str, data: AttendanceUpdate
    ) -> EmployeeAttendance:
        """Apply set fields and recompute hours. Project, employee and recorder never change."""
        record = self._get_in_project(project_id, attendance_id)

        changes = data.model_dump(exclude_unset=True)
        new_date = changes.get("date")
        if new_date is not None and new_date != record.date:
            clash = self.repo.find_existing(project_id, record.employee_id, new_date)
            if clash is not None and clash.id != record.id:
                raise DuplicateRecordError(
                    "Attendance already exists for this employee on this date",
                    details={"employee_id": record.employee_id, "date": new_date.isoformat()},
                )

        for field, value in changes.items():
            if value is None and field in ("date", "status"):
                continue
            if field == "notes":
                value = value or ""
            setattr(record, field, value)
        record.total_hours = compute_total_hours(record.check_in_time, record.check_out_time)

        self.db.commit()
        self.db.refresh(record)
        logger.info("Attendance updated", extra={"project_id": project_id, "attendance_id": attendance_id})
        self._publish(project_id, "update", record)
        return record

    def delete(self, project_id: str, attendance_id: str) -> None:
        record = self._get_in_project(project_id, attendance_id)
        record.is_deleted = True
        self.db.commit()
        logger.info("Attendance deleted", extra={"project_id": project_id, "attendance_id": attendance_id})
        self.events.publish(project_id, ATTENDANCE_UPDATE, "delete", attendanceId=attendance_id)

    def _get_in_project(self, project_id: str, attendance_id: str) -> EmployeeAttendance:
        self.projects.get(project_id)
        record = self.repo.get_by_id(attendance_id)
        if record.project_id != project_id:
            raise AttendanceNotFoundError(attendance_id)
        return record

    def _publish(self, project_id: str, action: str, record: EmployeeAttendance) -> None:
        payload = AttendanceResponse.model_validate(record).model_dump(mode="json", by_alias=True)
        self.events.publish(project_id, ATTENDANCE_UPDATE, action, attendance=payload)
