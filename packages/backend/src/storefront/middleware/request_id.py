"""Request ID middleware — unique ID per request for tracing.

The ID comes from the incoming X-Request-ID header or is generated,
is bound to structlog's contextvars so every log entry for the request
carries it, and is echoed in the response header.

BaseHTTPMiddleware never sees WebSocket scopes, so the /ws endpoint
calls bind_request_id itself; every chat log line for a connection then
carries the handshake's request id next to the connection id.
"""

import uuid

import structlog
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


def bind_request_id(headers: Headers, **extra) -> str:
    """Reset the log context for a new request or connection."""
    request_id = headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **extra)
    return request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Generate and propagate a unique request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = bind_request_id(request.headers, path=request.url.path)
        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
