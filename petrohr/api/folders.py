"""Folder tree and folder document endpoints for one employee."""

from fastapi import APIRouter, Depends, File, UploadFile

from .deps import get_folder_service
from .uploads import read_upload
from ..core.auth import AuthContext, require_auth
from ..exceptions import ValidationError
from ..schemas.folder import (
    DocumentDeleteRequest,
    DocumentUploadResponse,
    Folder,
    FolderCreate,
    FolderRename,
)
from ..services.folder_service import FolderService

router = APIRouter(prefix="/api/employees/{employee_id}/folders", tags=["folders"])


@router.post("", response_model=Folder, status_code=201)
def create_folder(
    employee_id: str,
    body: FolderCreate,
    service: FolderService = Depends(get_folder_service),
    auth: AuthContext = Depends(require_auth),
):
    """Create a folder at the root, or under ``parentId`` anywhere in the tree."""
    return service.add_folder(employee_id, body.name, body.parent_id)


@router.get("/{folder_id}", response_model=Folder)
def get_folder(
    employee_id: str,
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.get_folder(employee_id, folder_id)


@router.patch("/{folder_id}", response_model=Folder)
def rename_folder(
    employee_id: str,
    folder_id: str,
    body: FolderRename,
    service: FolderService = Depends(get_folder_service),
    auth: AuthContext = Depends(require_auth),
):
    if body.folder_id and body.folder_id != folder_id:
        raise ValidationError("folderId in body does not match the URL", field="folderId")
    return service.rename_folder(employee_id, folder_id, body.new_name)


@router.delete("/{folder_id}")
def delete_folder(
    employee_id: str,
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
    auth: AuthContext = Depends(require_auth),
):
    """Delete a folder with its whole subtree. Unknown ids succeed."""
    service.delete_folder(employee_id, folder_id)
    return {"success": True}


@router.post("/{folder_id}/documents", response_model=DocumentUploadResponse, status_code=201)
def upload_document(
    employee_id: str,
    folder_id: str,
    file: UploadFile = File(...),
    service: FolderService = Depends(get_folder_service),
    auth: AuthContext = Depends(require_auth),
):
    incoming = read_upload(file)
    document = service.add_document(employee_id, folder_id, incoming, uploaded_by=auth.user_id)
    return DocumentUploadResponse(message="Document uploaded", document=document)


@router.delete("/{folder_id}/documents")
def delete_document(
    employee_id: str,
    folder_id: str,
    body: DocumentDeleteRequest,
    service: FolderService = Depends(get_folder_service),
    auth: AuthContext = Depends(require_auth),
):
    service.delete_document(employee_id, folder_id, body.url, body.public_id)
    return {"success": True}
