"""Repository for the employee aggregate."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from .base import BaseRepository
from ..exceptions import ConflictError, DuplicateRecordError, EmployeeNotFoundError
from ..models.employee import Employee

logger = logging.getLogger(__name__)


class EmployeeRepository(BaseRepository[Employee]):
    """Data access for employees. Every write saves the whole row."""

    model_class = Employee
    not_found_error = EmployeeNotFoundError

    def get_all(self) -> List[Employee]:
        return self.db.query(Employee).order_by(Employee.name, Employee.id).all()

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.email == email).first()

    def count(self) -> int:
        return self.db.query(Employee).count()

    def save(self, employee: Employee) -> Employee:
        """Commit pending changes to *employee*.

        The UPDATE is conditioned on the version that was read; if another
        writer saved in between, nothing matches and ConflictError is raised
        instead of overwriting their changes.
        """
        employee_id, email = employee.id, employee.email
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            logger.warning(
                "Concurrent modification of employee",
                extra={"employee_id": employee_id},
            )
            raise ConflictError(employee_id) from e
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordError(
                "An employee with this email already exists",
                details={"email": email},
            ) from e
        self.db.refresh(employee)
        return employee

    def create(self, employee: Employee) -> Employee:
        self.db.add(employee)
        return self.save(employee)

    def delete(self, employee: Employee) -> None:
        employee_id = employee.id
        self.db.delete(employee)
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise ConflictError(employee_id) from e
