"""Response envelopes.

Two envelopes coexist and clients depend on both:
- REST routes:   {"status": "OK" | "ERR" | "FIL", "data": ...}
- view shortcuts: {"status": "success" | "error", "message" | "error": ...}

rest_errors / view_errors wrap a route so that anything unexpected
becomes a 500 in that route's envelope, carrying the raw error message.
Known failures (StorefrontError, HTTPException) pass through to the
global handlers.
"""

from functools import wraps
from typing import Any

import structlog
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import StorefrontError

logger = structlog.get_logger()


def ok(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"status": "OK", "data": data}),
    )


def rest_error(data: Any, status_code: int = 500, status: str = "ERR") -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": status, "data": data})


def view_success(message: str) -> JSONResponse:
    return JSONResponse(content={"status": "success", "message": message})


def view_error(error: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "error": error})


def _catch(fallback):
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (StorefrontError, StarletteHTTPException):
                raise
            except Exception as e:
                logger.error(
                    "storefront.route_error",
                    route=func.__name__,
                    error=str(e),
                    exc_info=e,
                )
                return fallback(str(e))
        return wrapper
    return decorator


rest_errors = _catch(rest_error)
view_errors = _catch(view_error)
