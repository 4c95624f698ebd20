"""Folder tree and document reference schemas.

These models are both the API contract and the shape of the JSON tree stored
on the employee row, so field aliases (camelCase) are used on both sides.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class FolderDocument(_CamelModel):
    """Reference to one stored file. Immutable once attached to a folder."""
    url: str
    type: str  # MIME type declared by the uploader
    name: str
    public_id: Optional[str] = None
    uploaded_by: Optional[str] = None
    uploaded_at: datetime
    size: Optional[int] = None
    format: Optional[str] = None
    resource_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class Folder(_CamelModel):
    """A named folder. ``id`` is unique across the whole employee tree."""
    id: str
    name: str
    parent_id: Optional[str] = None
    documents: List[FolderDocument] = Field(default_factory=list)
    subfolders: List['Folder'] = Field(default_factory=list)

    @field_validator('documents', 'subfolders', mode='before')
    @classmethod
    def default_missing_lists(cls, v):
        return [] if v is None else v


Folder.model_rebuild()


class FolderCreate(_CamelModel):
    """Body of POST /employees/{id}/folders."""
    name: str
    parent_id: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be empty")
        return v

    @field_validator('parent_id')
    @classmethod
    def blank_parent_is_root(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class FolderRename(_CamelModel):
    """Body of PATCH /employees/{id}/folders/{folderId}."""
    new_name: str
    folder_id: Optional[str] = None


class DocumentDeleteRequest(_CamelModel):
    """Body of DELETE /employees/{id}/folders/{folderId}/documents."""
    url: str
    public_id: Optional[str] = None


class DocumentUploadResponse(_CamelModel):
    message: str
    document: FolderDocument
