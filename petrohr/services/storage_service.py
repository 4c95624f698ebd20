"""Object storage for employee documents and profile images.

Uploads go to a MinIO / S3 bucket and come back as an ``UploadResult``:
public URL, object name (``public_id``), size, format, resource type, and
pixel dimensions for images.

PDFs are stored as ``raw`` objects named ``<folder>/<ms timestamp>-<original
name>`` with format forced to ``pdf``. Every other file is sniffed with
Pillow: anything Pillow can open is an ``image`` with width and height, the
rest is ``raw``. Those names get a random suffix so re-uploads of the same
file never overwrite each other.
"""

import io
import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple

from minio import Minio
from minio.error import MinioException
from PIL import Image, UnidentifiedImageError

from ..core.config import settings
from ..exceptions import StorageError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


@dataclass
class IncomingFile:
    """An uploaded file that passed the route-level gate."""
    content: bytes
    mime_type: str
    filename: str


@dataclass
class UploadResult:
    url: str
    public_id: str
    size: int
    format: Optional[str]
    resource_type: str
    width: Optional[int] = None
    height: Optional[int] = None


def _probe_image(content: bytes) -> Optional[Tuple[str, int, int]]:
    """(format, width, height) if Pillow recognises *content*, else None.

    Images whose declared size trips Pillow's decompression bomb limit are
    not treated as images; they are stored as raw files.
    """
    try:
        with Image.open(io.BytesIO(content)) as image:
            fmt = (image.format or "").lower() or None
            return fmt, image.width, image.height
    except Image.DecompressionBombError:
        logger.warning("Image exceeds pixel limit, storing as raw file", extra={"size": len(content)})
        return None
    except (UnidentifiedImageError, OSError):
        return None


def _extension_format(filename: str) -> Optional[str]:
    ext = os.path.splitext(filename)[1].lstrip(".").lower()
    return ext or None


def _safe_name(filename: str) -> str:
    return os.path.basename(filename.replace("\\", "/")).strip() or "file"


class DocumentStorage:
    """Thin adapter over a MinIO client. Errors surface as ``StorageError``."""

    def __init__(self, client: Minio, bucket: str, public_url: str):
        self.client = client
        self.bucket = bucket
        self.public_url = public_url.rstrip("/")
        self._bucket_checked = False

    def upload(self, content: bytes, mime_type: str, original_name: str, folder: str) -> UploadResult:
        """Store *content* under *folder* and describe the stored object."""
        name = _safe_name(original_name)

        if mime_type == PDF_MIME_TYPE:
            object_name = f"{folder}/{int(time.time() * 1000)}-{name}"
            fmt: Optional[str] = "pdf"
            resource_type = "raw"
            width = height = None
        else:
            stem, ext = os.path.splitext(name)
            object_name = f"{folder}/{stem}_{uuid.uuid4().hex[:6]}{ext}"
            probed = _probe_image(content)
            if probed is not None:
                fmt, width, height = probed
                fmt = fmt or _extension_format(name)
                resource_type = "image"
            else:
                fmt, width, height = _extension_format(name), None, None
                resource_type = "raw"

        self._put(object_name, content, mime_type)
        logger.info(
            "Stored object",
            extra={"public_id": object_name, "size": len(content), "resource_type": resource_type},
        )
        return UploadResult(
            url=f"{self.public_url}/{object_name}",
            public_id=object_name,
            size=len(content),
            format=fmt,
            resource_type=resource_type,
            width=width,
            height=height,
        )

    def destroy(self, public_id: str) -> None:
        """Delete a stored object by its handle."""
        try:
            self.client.remove_object(self.bucket, public_id)
        except MinioException as e:
            raise StorageError(str(e), public_id=public_id) from e
        logger.info("Removed object", extra={"public_id": public_id})

    def _put(self, object_name: str, content: bytes, mime_type: str) -> None:
        try:
            self._ensure_bucket()
            self.client.put_object(
                bucket_name=self.bucket,
                object_name=object_name,
                data=io.BytesIO(content),
                length=len(content),
                content_type=mime_type,
            )
        except MinioException as e:
            raise StorageError(str(e), public_id=object_name) from e

    def _ensure_bucket(self) -> None:
        if self._bucket_checked:
            return
        if not self.client.bucket_exists(self.bucket):
            self.client.make_bucket(self.bucket)
        self._bucket_checked = True


_storage: Optional[DocumentStorage] = None


def get_storage() -> DocumentStorage:
    """Get or create the shared storage adapter from settings."""
    global _storage
    if _storage is None:
        client = Minio(
            endpoint=settings.storage_endpoint,
            access_key=settings.storage_access_key,
            secret_key=settings.storage_secret_key,
            secure=settings.storage_secure,
        )
        _storage = DocumentStorage(client, settings.storage_bucket, settings.get_storage_public_url())
    return _storage
