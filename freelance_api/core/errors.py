"""
Error Handling Module

Domain exceptions raised by the storage and service layers, and the FastAPI
exception handlers that turn them into HTTP responses. Route handlers
raise HTTPException for request-level failures (404/403);
everything below the route layer raises a PortalError subclass instead.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    code: Optional[str] = None

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class ConflictError(PortalError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Conflict"


class DuplicateUsernameError(ConflictError):
    detail = "Username already taken"


class InvalidCredentialsError(PortalError):
    # Same message for an unknown username and a wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"


class InvalidTokenError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Invalid or expired token"


class StorageError(PortalError):
    """An unexpected database failure. The detail is never shown to callers."""


class UploadRejectedError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Upload rejected"
    code = "upload_rejected"


class FileTooLargeError(UploadRejectedError):
    code = "file_too_large"


class UnsupportedFileTypeError(UploadRejectedError):
    code = "unsupported_file_type"


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": PortalError.detail},
        )

    content = {"detail": exc.detail}
    if exc.code:
        content["code"] = exc.code
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 with one entry per offending field."""
    errors = []
    for error in exc.errors():
        # loc looks like ("body", "email") or ("query", "limit"); drop the source part
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        errors.append({
            "field": ".".join(location) or None,
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": PortalError.detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
