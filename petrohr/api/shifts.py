"""Shift endpoints under a project's operation view."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .deps import get_event_publisher
from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.scheduling import ShiftCreate, ShiftResponse, ShiftUpdate
from ..services.project_events import ProjectEventPublisher
from ..services.shift_service import ShiftService

router = APIRouter(prefix="/api/projects/{project_id}/operation/shifts", tags=["shifts"])


def get_shift_service(
    db: Session = Depends(get_db),
    events: ProjectEventPublisher = Depends(get_event_publisher),
) -> ShiftService:
    return ShiftService(db, events)


@router.get("", response_model=List[ShiftResponse])
def list_shifts(
    project_id: str,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    shift_type: Optional[str] = Query(None, alias="type"),
    status: Optional[str] = None,
    service: ShiftService = Depends(get_shift_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.list(project_id, start_date, end_date, employee_id, shift_type, status)


@router.post("", response_model=ShiftResponse, status_code=201)
def create_shift(
    project_id: str,
    body: ShiftCreate,
    service: ShiftService = Depends(get_shift_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.create(project_id, body, created_by=auth.user_id)


@router.put("/{shift_id}", response_model=ShiftResponse)
def update_shift(
    project_id: str,
    shift_id: str,
    body: ShiftUpdate,
    service: ShiftService = Depends(get_shift_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.update(project_id, shift_id, body)


@router.delete("/{shift_id}")
def delete_shift(
    project_id: str,
    shift_id: str,
    service: ShiftService = Depends(get_shift_service),
    auth: AuthContext = Depends(require_auth),
):
    service.delete(project_id, shift_id)
    return {"success": True}
