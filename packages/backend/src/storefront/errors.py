"""Error dictionary and global exception handlers.

Known failures are raised as StorefrontError with a key from ERRORS.
The key fixes the HTTP status and a friendly default message; the raiser
can override the message, and can ask for the REST envelope
({status, data}) instead of the plain {error} body.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


@dataclass(frozen=True)
class ErrorInfo:
    code: int
    message: str


ERRORS: dict[str, ErrorInfo] = {
    "PAGE_NOT_FOUND": ErrorInfo(404, "Page not found"),
    "INVALID_PARAMETER": ErrorInfo(404, "Invalid parameter"),
    "MISSING_FIELDS": ErrorInfo(400, "Missing required fields"),
    "UPLOAD_FAILED": ErrorInfo(400, "Could not upload the file"),
    "PRODUCT_MODEL_FIND_ERROR": ErrorInfo(500, "Error retrieving products"),
    "UNAUTHORIZED": ErrorInfo(401, "Authentication required"),
    "FORBIDDEN": ErrorInfo(403, "Unauthorized access"),
    "INVALID_CREDENTIALS": ErrorInfo(401, "Invalid credentials"),
    "EMAIL_TAKEN": ErrorInfo(409, "Email already registered"),
    "INVALID_FIELDS": ErrorInfo(400, "Invalid field values"),
}


class StorefrontError(Exception):
    """A known failure, mapped to a status code through ERRORS."""

    def __init__(
        self,
        key: str,
        message: Optional[str] = None,
        envelope: Optional[str] = None,
    ):
        info = ERRORS[key]
        self.key = key
        self.code = info.code
        self.message = message or info.message
        self.envelope = envelope
        super().__init__(self.message)


def error_body(exc: StorefrontError) -> dict:
    if exc.envelope:
        return {"status": exc.envelope, "data": exc.message}
    return {"error": exc.message}


async def storefront_error_handler(request: Request, exc: StorefrontError):
    logger.info(
        "storefront.error",
        key=exc.key,
        code=exc.code,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.code, content=error_body(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = ERRORS["PAGE_NOT_FOUND"].message
    else:
        message = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "storefront.unhandled_error",
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
