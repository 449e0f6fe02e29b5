"""
Product Catalog Backend — Request ID Middleware
=================================================

What:  Tags every request with a correlation ID, echoed in X-Request-ID.
Why:   Lets a client quote the ID of a failed call and lets us find every log
       line that belongs to it.
How:   A client-supplied X-Request-ID is reused only when it is a short token
       of letters, digits, `.`, `_` or `-`. Anything else (too long, spaces,
       control characters) is replaced by a fresh 8-char UUID prefix, so log
       lines and response headers never carry caller-controlled junk.
       The ID lives in a ContextVar read by the access log and the error
       handlers.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(supplied: Optional[str]) -> str:
    """Return the caller's ID if it is a safe token, otherwise a new one."""
    if supplied and _CLIENT_ID_PATTERN.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID to the request context and the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        # Left set after the call so the catch-all 500 handler, which runs
        # outside this middleware, can still read it
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
