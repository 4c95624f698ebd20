"""Attendance endpoints under a project's operation view."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .deps import get_event_publisher
from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.scheduling import AttendanceCreate, AttendanceResponse, AttendanceUpdate
from ..services.attendance_service import AttendanceService
from ..services.project_events import ProjectEventPublisher

router = APIRouter(prefix="/api/projects/{project_id}/operation/attendance", tags=["attendance"])


def get_attendance_service(
    db: Session = Depends(get_db),
    events: ProjectEventPublisher = Depends(get_event_publisher),
) -> AttendanceService:
    return AttendanceService(db, events)


@router.get("", response_model=List[AttendanceResponse])
def list_attendance(
    project_id: str,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    status: Optional[str] = None,
    service: AttendanceService = Depends(get_attendance_service),
    auth: AuthContext = Depends(require_auth),
):
    """Attendance of the project, newest first."""
    return service.list(project_id, start_date, end_date, employee_id, status)


@router.post("", response_model=AttendanceResponse, status_code=201)
def record_attendance(
    project_id: str,
    body: AttendanceCreate,
    service: AttendanceService = Depends(get_attendance_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.create(project_id, body, recorded_by=auth.user_id)


@router.put("/{attendance_id}", response_model=AttendanceResponse)
def update_attendance(
    project_id: str,
    attendance_id: str,
    body: AttendanceUpdate,
    service: AttendanceService = Depends(get_attendance_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.update(project_id, attendance_id, body)


@router.delete("/{attendance_id}")
def delete_attendance(
    project_id: str,
    attendance_id: str,
    service: AttendanceService = Depends(get_attendance_service),
    auth: AuthContext = Depends(require_auth),
):
    service.delete(project_id, attendance_id)
    return {"success": True}
