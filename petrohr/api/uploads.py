"""Route-level gate for uploaded files.

Runs before any storage call: the MIME type must be allowed, the file must
have a name and a body, and the body must fit in ``upload_max_bytes``.
"""

from typing import FrozenSet, List, Optional

from fastapi import UploadFile

from ..core.config import settings
from ..exceptions import ValidationError
from ..services.storage_service import IncomingFile

IMAGE_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
})

DOCUMENT_MIME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}) | IMAGE_MIME_TYPES

MAX_EMPLOYEE_DOCUMENTS = 5


def read_upload(
    upload: UploadFile,
    allowed: FrozenSet[str] = DOCUMENT_MIME_TYPES,
    field: str = "file",
) -> IncomingFile:
    """Validate *upload* and read it fully into memory."""
    if not upload.filename:
        raise ValidationError("No file provided", field=field)

    mime_type = (upload.content_type or "").lower()
    if mime_type not in allowed:
        raise ValidationError(f"File type not allowed: {mime_type or 'unknown'}", field=field)

    limit = settings.upload_max_bytes
    content = upload.file.read(limit + 1)
    if not content:
        raise ValidationError("Uploaded file is empty", field=field)
    if len(content) > limit:
        raise ValidationError(
            f"File exceeds the {limit // (1024 * 1024)} MB limit", field=field
        )

    return IncomingFile(content=content, mime_type=mime_type, filename=upload.filename)


def read_optional_image(upload: Optional[UploadFile], field: str) -> Optional[IncomingFile]:
    if upload is None or not upload.filename:
        return None
    return read_upload(upload, allowed=IMAGE_MIME_TYPES, field=field)


def read_documents(uploads: Optional[List[UploadFile]], field: str = "documents") -> List[IncomingFile]:
    files = [u for u in uploads or [] if u.filename]
    if len(files) > MAX_EMPLOYEE_DOCUMENTS:
        raise ValidationError(
            f"At most {MAX_EMPLOYEE_DOCUMENTS} documents can be uploaded at once", field=field
        )
    return [read_upload(u, field=field) for u in files]
