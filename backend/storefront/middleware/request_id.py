"""
Storefront Backend — Request ID Middleware
============================================

What:  Gives every request a correlation ID and returns it in X-Request-ID.
How:   Reuses the caller's X-Request-ID header when present, otherwise
       generates a short UUID; the value lives in a ContextVar so loggers
       and exception handlers can read it without access to the request.
Who:   Error responses include it as `request_id`; access logs print it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns the request ID.

    Behavior:
        1. Take X-Request-ID from the client if sent (admin dashboard and
           storefront clients can correlate their own logs)
        2. Otherwise generate an 8 character ID
        3. Store it in request_id_var and request.state.request_id
        4. Echo it in the response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
