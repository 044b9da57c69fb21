# storefront/api/errors.py
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain.errors import (
    Conflict,
    InvalidInput,
    NotFound,
    PermissionDenied,
    StorageFailure,
    StorefrontError,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# kolejnosc ma znaczenie - pierwsze dopasowanie wygrywa
_STATUS = (
    (NotFound, 404, "Not Found"),
    (PermissionDenied, 403, "Forbidden"),
    (InvalidInput, 400, "Bad Request"),
    (Conflict, 409, "Conflict"),
    (StorageFailure, 503, "Storage Failure"),
)


def status_for(exc: StorefrontError) -> tuple[int, str]:
    for kind, status, error in _STATUS:
        if isinstance(exc, kind):
            return status, error
    return 500, "Internal Server Error"


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status, error = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=status,
        content={
            "statusCode": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            "error": error,
            "message": exc.message,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
