"""Exception handler for structured error responses."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from ..exceptions import PetroException

logger = logging.getLogger(__name__)


async def petro_exception_handler(request: Request, exc: PetroException) -> JSONResponse:
    """Turn a PetroException into ``{"error", "message", "details"}`` with its status.

    Client errors are logged at WARNING, everything else at ERROR.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"PetroException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
