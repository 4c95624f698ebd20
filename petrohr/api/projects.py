"""Project and project-team endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.scheduling import AssignmentCreate, AssignmentResponse, ProjectCreate, ProjectResponse
from ..services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    body: ProjectCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return ProjectService(db).create(body)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return ProjectService(db).get(project_id)


@router.get("/{project_id}/employees", response_model=List[AssignmentResponse])
def list_project_employees(
    project_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    return ProjectService(db).list_assignments(project_id)


@router.post("/{project_id}/employees", response_model=AssignmentResponse, status_code=201)
def assign_employee(
    project_id: str,
    body: AssignmentCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Add an existing employee to the project team."""
    return ProjectService(db).assign_employee(project_id, body, assigned_by=auth.user_id)
