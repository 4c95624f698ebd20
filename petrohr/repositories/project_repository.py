"""Repository for projects and their employee assignments."""

from typing import List, Optional

from .base import BaseRepository
from ..exceptions import ProjectNotFoundError
from ..models.project import Project, ProjectAssignment


class ProjectRepository(BaseRepository[Project]):
    """Data access layer for projects."""

    model_class = Project
    not_found_error = ProjectNotFoundError

    def get_assignments(self, project_id: str) -> List[ProjectAssignment]:
        return (
            self.db.query(ProjectAssignment)
            .filter(ProjectAssignment.project_id == project_id)
            .order_by(ProjectAssignment.assigned_at, ProjectAssignment.id)
            .all()
        )

    def find_assignment(self, project_id: str, employee_id: str) -> Optional[ProjectAssignment]:
        return (
            self.db.query(ProjectAssignment)
            .filter(
                ProjectAssignment.project_id == project_id,
                ProjectAssignment.employee_id == employee_id,
            )
            .first()
        )
