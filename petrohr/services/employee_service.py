"""Employee records: cached reads, profile writes, and hire-time uploads."""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from .employee_cache import EmployeeCache
from .folder_service import attach_documents, to_folder_document
from .folder_tree import FolderTree
from .storage_service import DocumentStorage, IncomingFile
from ..exceptions import DuplicateRecordError, PetroException, StorageError
from ..models.employee import Employee
from ..repositories.employee_repository import EmployeeRepository
from ..schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from ..schemas.folder import FolderDocument

logger = logging.getLogger(__name__)

DOCUMENTS_FOLDER = "Documents"
PROFILE_IMAGE_PATH = "employees/profile-images"


def employee_documents_path(employee_id: str) -> str:
    return f"employees/{employee_id}/documents"


class EmployeeService:
    """Employee CRUD. Reads go through the cache, writes invalidate it."""

    def __init__(self, db: Session, cache: EmployeeCache, storage: DocumentStorage):
        self.db = db
        self.repo = EmployeeRepository(db)
        self.cache = cache
        self.storage = storage

    def get(self, employee_id: str) -> EmployeeResponse:
        cached = self.cache.get_employee(employee_id)
        if cached is not None:
            return cached

        employee = self.repo.get_by_id(employee_id)
        response = EmployeeResponse.model_validate(employee)
        self.cache.set_employee(response)
        return response

    def list(self) -> List[EmployeeResponse]:
        cached = self.cache.get_all()
        if cached is not None:
            return cached

        employees = [EmployeeResponse.model_validate(e) for e in self.repo.get_all()]
        self.cache.set_all(employees)
        return employees

    def create(
        self,
        data: EmployeeCreate,
        profile_image: Optional[IncomingFile] = None,
        documents: Optional[List[IncomingFile]] = None,
        uploaded_by: Optional[str] = None,
    ) -> EmployeeResponse:
        """Create an employee. Uploaded documents land in a root "Documents" folder."""
        if self.repo.get_by_email(data.email) is not None:
            raise DuplicateRecordError(
                "An employee with this email already exists", details={"email": data.email}
            )

        employee = Employee(id=uuid.uuid4().hex, folders=[], **data.model_dump())

        uploaded: List[str] = []
        try:
            if profile_image is not None:
                self._set_profile_image(employee, profile_image, uploaded)
            if documents:
                tree = FolderTree()
                attach_documents(
                    tree,
                    DOCUMENTS_FOLDER,
                    self._upload_documents(employee.id, documents, uploaded_by, uploaded),
                )
                employee.folders = tree.to_json()

            self.repo.create(employee)
        except PetroException:
            self._discard_uploads(uploaded)
            raise

        self.cache.invalidate(employee.id)
        logger.info("Employee created", extra={"employee_id": employee.id})
        return EmployeeResponse.model_validate(employee)

    def update(
        self,
        employee_id: str,
        data: EmployeeUpdate,
        profile_image: Optional[IncomingFile] = None,
        documents: Optional[List[IncomingFile]] = None,
        uploaded_by: Optional[str] = None,
    ) -> EmployeeResponse:
        """Apply set fields. A new profile image replaces the old one; new
        documents are appended to the root "Documents" folder."""
        employee = self.repo.get_by_id(employee_id)

        changes = data.model_dump(exclude_unset=True)
        if "email" in changes and changes["email"] != employee.email:
            if self.repo.get_by_email(changes["email"]) is not None:
                raise DuplicateRecordError(
                    "An employee with this email already exists", details={"email": changes["email"]}
                )
        for field, value in changes.items():
            if value is None and field in ("name", "email", "department", "status"):
                continue
            setattr(employee, field, value)

        old_public_id = None
        uploaded: List[str] = []
        try:
            if profile_image is not None:
                old_public_id = employee.profile_image_public_id
                self._set_profile_image(employee, profile_image, uploaded)

            if documents:
                tree = FolderTree.from_json(employee.folders)
                attach_documents(
                    tree,
                    DOCUMENTS_FOLDER,
                    self._upload_documents(employee_id, documents, uploaded_by, uploaded),
                )
                employee.folders = tree.to_json()

            self.repo.save(employee)
        except PetroException:
            self.db.rollback()
            self._discard_uploads(uploaded)
            raise
        self.cache.invalidate(employee_id)

        if old_public_id:
            self._destroy_quietly(old_public_id)

        logger.info("Employee updated", extra={"employee_id": employee_id})
        return EmployeeResponse.model_validate(employee)

    def delete(self, employee_id: str) -> None:
        employee = self.repo.get_by_id(employee_id)
        self.repo.delete(employee)
        self.cache.invalidate(employee_id)
        logger.info("Employee deleted", extra={"employee_id": employee_id})

    def _set_profile_image(self, employee: Employee, image: IncomingFile, uploaded: List[str]) -> None:
        result = self.storage.upload(image.content, image.mime_type, image.filename, PROFILE_IMAGE_PATH)
        uploaded.append(result.public_id)
        employee.profile_image = result.url
        employee.profile_image_public_id = result.public_id

    def _upload_documents(
        self,
        employee_id: str,
        files: List[IncomingFile],
        uploaded_by: Optional[str],
        uploaded: List[str],
    ) -> List[FolderDocument]:
        path = employee_documents_path(employee_id)
        documents = []
        for f in files:
            result = self.storage.upload(f.content, f.mime_type, f.filename, path)
            uploaded.append(result.public_id)
            documents.append(to_folder_document(result, f, uploaded_by))
        return documents

    def _discard_uploads(self, public_ids: List[str]) -> None:
        """Remove objects stored for a write that did not commit."""
        for public_id in public_ids:
            self._destroy_quietly(public_id)

    def _destroy_quietly(self, public_id: str) -> None:
        try:
            self.storage.destroy(public_id)
        except StorageError as e:
            logger.warning(
                "Could not remove stored object: %s", e.message, extra={"public_id": public_id}
            )
