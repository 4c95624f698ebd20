"""Main FastAPI application."""

import logging
import re
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from . import models  # noqa: F401  registers tables on Base.metadata
from .database import engine, Base, get_db, DATABASE_URL, is_postgresql
from .api import (
    attendance_router,
    employees_router,
    folders_router,
    projects_router,
    shifts_router,
)
from .core.config import settings, ConfigurationError, Environment
from .core.logging_config import setup_logging
from .middleware.exception_handler import petro_exception_handler
from .middleware.request_context import RequestContextMiddleware
from .exceptions import PetroException

# Setup logging first
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)


def _mask_url(url: str) -> str:
    """Mask password in database URL for safe logging."""
    return re.sub(r'://([^:]+):([^@]+)@', r'://\1:***@', url)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the PetroHR API."""
    logger.info(f"Environment: {settings.environment.value}")
    try:
        settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT:
        for problem in settings.insecure_settings():
            logger.warning(f"SECURITY: {problem}")

    logger.info(f"Connecting to database: {_mask_url(DATABASE_URL)}")
    Base.metadata.create_all(bind=engine)

    yield


app = FastAPI(
    title="PetroHR API",
    description=(
        "Employee records with nested document folders, project teams, "
        "attendance and shift scheduling.\n\n"
        "**Authentication:** When `AUTH_ENABLED=true`, every `/api` endpoint requires a "
        "`Bearer` token in the `Authorization` header. When `AUTH_ENABLED=false` "
        "(default), all endpoints are open."
    ),
    version=__version__,
    lifespan=lifespan,
)

# Middleware stack (outermost first, CORS wraps request context).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestContextMiddleware)

app.add_exception_handler(PetroException, petro_exception_handler)

logger.info(
    "PetroHR API started | env=%s | db=%s | auth=%s | cors=%s",
    settings.environment.value,
    "PostgreSQL" if is_postgresql() else "SQLite",
    "enabled" if settings.auth_enabled else "disabled",
    ",".join(settings.get_cors_origins()),
)

app.include_router(employees_router)
app.include_router(folders_router)
app.include_router(projects_router)
app.include_router(attendance_router)
app.include_router(shifts_router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "PetroHR API",
        "version": __version__,
        "status": "running"
    }


_startup_time = time.monotonic()


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Database status, uptime, and employee count.

    Never raises: a database failure is reported as ``degraded`` so load
    balancers can still probe without receiving 5xx.
    """
    db_status = "ok"
    employee_count = 0
    try:
        db.execute(text("SELECT 1"))
        employee_count = db.execute(text("SELECT COUNT(*) FROM employees")).scalar() or 0
    except SQLAlchemyError:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": __version__,
        "employee_count": employee_count,
    }
