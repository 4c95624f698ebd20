"""Folder and document operations on an employee's embedded folder tree.

Every operation loads the employee, rebuilds the tree from its JSON column,
mutates it, writes the whole tree back, and saves the row. The save is
version-checked, so two writers racing on one employee get a ConflictError
rather than a silently lost update. Both employee cache keys are dropped
after each successful save.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from .employee_cache import EmployeeCache
from .folder_tree import FolderTree, iter_subtree_documents
from .storage_service import DocumentStorage, IncomingFile, UploadResult
from ..core.config import settings
from ..exceptions import (
    ConflictError,
    FolderNotFoundError,
    ParentFolderNotFoundError,
    StorageError,
)
from ..models.employee import Employee
from ..repositories.employee_repository import EmployeeRepository
from ..schemas.folder import Folder, FolderDocument

logger = logging.getLogger(__name__)


def new_folder_id() -> str:
    return uuid.uuid4().hex


def to_folder_document(
    result: UploadResult, incoming: IncomingFile, uploaded_by: Optional[str]
) -> FolderDocument:
    """Document reference for a file the storage adapter just accepted."""
    return FolderDocument(
        url=result.url,
        type=incoming.mime_type,
        name=incoming.filename,
        public_id=result.public_id,
        uploaded_by=uploaded_by,
        uploaded_at=datetime.now(timezone.utc),
        size=result.size,
        format=result.format,
        resource_type=result.resource_type,
        width=result.width,
        height=result.height,
    )


def folder_storage_path(employee_id: str, folder_id: str) -> str:
    return f"employees/{employee_id}/folders/{folder_id}"


class FolderService:
    """Folder tree operations for one request.

    Public methods:
        get_folder       -- subtree of one folder
        add_folder       -- new folder at the root or under a parent
        rename_folder    -- overwrite a folder's name
        delete_folder    -- prune a folder and its whole subtree; idempotent
        add_document     -- upload a file and attach it to a folder
        delete_document  -- remove the stored object, then its reference
    """

    def __init__(
        self,
        db: Session,
        cache: EmployeeCache,
        storage: DocumentStorage,
        purge_storage: Optional[bool] = None,
    ):
        self.db = db
        self.employee_repo = EmployeeRepository(db)
        self.cache = cache
        self.storage = storage
        self.purge_storage = (
            settings.purge_storage_on_folder_delete if purge_storage is None else purge_storage
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_folder(self, employee_id: str, folder_id: str) -> Folder:
        _, tree = self._load(employee_id)
        return self._require_folder(tree, folder_id)

    def add_folder(self, employee_id: str, name: str, parent_id: Optional[str] = None) -> Folder:
        employee, tree = self._load(employee_id)

        parent = None
        if parent_id:
            parent = tree.find(parent_id)
            if parent is None:
                raise ParentFolderNotFoundError(parent_id)

        folder = tree.add(Folder(id=new_folder_id(), name=name), parent=parent)
        self._save(employee, tree)
        logger.info(
            "Folder created",
            extra={"employee_id": employee_id, "folder_id": folder.id, "parent_id": parent_id},
        )
        return folder

    def rename_folder(self, employee_id: str, folder_id: str, new_name: str) -> Folder:
        employee, tree = self._load(employee_id)
        folder = self._require_folder(tree, folder_id)
        folder.name = new_name
        self._save(employee, tree)
        logger.info("Folder renamed", extra={"employee_id": employee_id, "folder_id": folder_id})
        return folder

    def delete_folder(self, employee_id: str, folder_id: str) -> None:
        """Remove the folder and everything beneath it.

        Deleting an id that is not in the tree succeeds without writing, but
        still drops the cached employee.
        Stored objects of the removed documents are only deleted when
        ``purge_storage`` is on, after the save, and failures there are logged.
        """
        employee, tree = self._load(employee_id)
        removed = tree.remove(folder_id)
        if not removed:
            self.cache.invalidate(employee_id)
            return

        self._save(employee, tree)
        logger.info("Folder deleted", extra={"employee_id": employee_id, "folder_id": folder_id})

        if self.purge_storage:
            for folder in removed:
                self._purge_documents(folder)

    def add_document(
        self,
        employee_id: str,
        folder_id: str,
        incoming: IncomingFile,
        uploaded_by: Optional[str],
    ) -> FolderDocument:
        """Upload *incoming* and append its reference to the folder.

        Storage errors propagate unchanged. If the save then loses a version
        race, the freshly stored object is removed before re-raising.
        """
        employee, tree = self._load(employee_id)
        folder = self._require_folder(tree, folder_id)

        result = self.storage.upload(
            incoming.content,
            incoming.mime_type,
            incoming.filename,
            folder_storage_path(employee_id, folder_id),
        )
        document = to_folder_document(result, incoming, uploaded_by)
        folder.documents.append(document)

        try:
            self._save(employee, tree)
        except ConflictError:
            self._destroy_quietly(result.public_id)
            raise

        logger.info(
            "Document added",
            extra={"employee_id": employee_id, "folder_id": folder_id, "public_id": result.public_id},
        )
        return document

    def delete_document(
        self, employee_id: str, folder_id: str, url: str, public_id: Optional[str] = None
    ) -> None:
        """Delete the stored object (when a handle is given), then drop every
        reference with this exact url. A storage failure leaves the tree as is."""
        employee, tree = self._load(employee_id)
        folder = self._require_folder(tree, folder_id)

        if public_id:
            self.storage.destroy(public_id)

        folder.documents = [doc for doc in folder.documents if doc.url != url]
        self._save(employee, tree)
        logger.info(
            "Document removed",
            extra={"employee_id": employee_id, "folder_id": folder_id, "public_id": public_id},
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, employee_id: str):
        employee = self.employee_repo.get_by_id(employee_id)
        return employee, FolderTree.from_json(employee.folders)

    @staticmethod
    def _require_folder(tree: FolderTree, folder_id: str) -> Folder:
        folder = tree.find(folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        return folder

    def _save(self, employee: Employee, tree: FolderTree) -> None:
        employee.folders = tree.to_json()
        self.employee_repo.save(employee)
        self.cache.invalidate(employee.id)

    def _purge_documents(self, folder: Folder) -> None:
        for document in iter_subtree_documents(folder):
            if document.public_id:
                self._destroy_quietly(document.public_id)

    def _destroy_quietly(self, public_id: str) -> None:
        try:
            self.storage.destroy(public_id)
        except StorageError as e:
            logger.warning(
                "Could not remove stored object: %s", e.message, extra={"public_id": public_id}
            )


def attach_documents(
    tree: FolderTree, folder_name: str, documents: List[FolderDocument]
) -> Folder:
    """Append *documents* to the first root folder called *folder_name*,
    creating that root folder if there is none."""
    folder = next((f for f in tree.roots if f.name == folder_name), None)
    if folder is None:
        folder = tree.add(Folder(id=new_folder_id(), name=folder_name))
    folder.documents.extend(documents)
    return folder
