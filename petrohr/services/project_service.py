"""Projects and employee assignments."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import DuplicateRecordError, ValidationError
from ..models.project import Project, ProjectAssignment
from ..repositories.employee_repository import EmployeeRepository
from ..repositories.project_repository import ProjectRepository
from ..schemas.scheduling import AssignmentCreate, ProjectCreate

logger = logging.getLogger(__name__)


class ProjectService:

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProjectRepository(db)
        self.employee_repo = EmployeeRepository(db)

    def create(self, data: ProjectCreate) -> Project:
        project = self.repo.add(Project(**data.model_dump()))
        logger.info("Project created", extra={"project_id": project.id})
        return project

    def get(self, project_id: str) -> Project:
        return self.repo.get_by_id(project_id)

    def list_assignments(self, project_id: str) -> List[ProjectAssignment]:
        self.repo.get_by_id(project_id)
        return self.repo.get_assignments(project_id)

    def assign_employee(
        self, project_id: str, data: AssignmentCreate, assigned_by: str
    ) -> ProjectAssignment:
        """Add an existing employee to the project's team."""
        self.repo.get_by_id(project_id)
        self.employee_repo.get_by_id(data.employee_id)

        if self.repo.find_assignment(project_id, data.employee_id) is not None:
            raise DuplicateRecordError(
                "Employee is already assigned to this project",
                details={"project_id": project_id, "employee_id": data.employee_id},
            )

        assignment = ProjectAssignment(
            project_id=project_id, assigned_by=assigned_by, **data.model_dump()
        )
        self.db.add(assignment)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordError(
                "Employee is already assigned to this project",
                details={"project_id": project_id, "employee_id": data.employee_id},
            ) from e
        self.db.refresh(assignment)
        logger.info(
            "Employee assigned to project",
            extra={"project_id": project_id, "employee_id": data.employee_id},
        )
        return assignment

    def ensure_assigned(self, project_id: str, employee_id: str) -> None:
        """Raise ValidationError unless *employee_id* is on the project's team."""
        project = self.repo.get_by_id(project_id)
        for assignment in project.employees:
            if assignment.employee_id == employee_id:
                return
        raise ValidationError("Employee is not assigned to this project", field="employeeId")
