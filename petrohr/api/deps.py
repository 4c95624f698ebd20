"""Shared FastAPI dependencies for services backed by Redis and object storage.

Tests replace ``get_cache``, ``get_document_storage`` and
``get_event_publisher`` through ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.config import settings
from ..database import get_db
from ..services.employee_cache import EmployeeCache, get_redis_client
from ..services.employee_service import EmployeeService
from ..services.folder_service import FolderService
from ..services.project_events import ProjectEventPublisher
from ..services.storage_service import DocumentStorage, get_storage


def get_cache() -> EmployeeCache:
    return EmployeeCache(get_redis_client(), settings.employee_cache_ttl_seconds)


def get_document_storage() -> DocumentStorage:
    return get_storage()


def get_event_publisher() -> ProjectEventPublisher:
    return ProjectEventPublisher(get_redis_client())


def get_employee_service(
    db: Session = Depends(get_db),
    cache: EmployeeCache = Depends(get_cache),
    storage: DocumentStorage = Depends(get_document_storage),
) -> EmployeeService:
    return EmployeeService(db, cache, storage)


def get_folder_service(
    db: Session = Depends(get_db),
    cache: EmployeeCache = Depends(get_cache),
    storage: DocumentStorage = Depends(get_document_storage),
) -> FolderService:
    return FolderService(db, cache, storage)
