"""
Storefront Backend — Request Logging Middleware
=================================================

What:  Access log for the API: one line per request, tagged with the API
       area and the authenticated actor.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Line format:
    POST /admin/regions -> 200 in 12.3ms [4f1c2a9b] area=admin actor=usr_… client=10.0.0.4

Privacy:
    Query strings (presigned URL signatures), bodies (passwords) and
    credential headers (Authorization, x-api-key, Cookie) are never logged.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront.middleware.request_id import request_id_var

logger = logging.getLogger("storefront.access")

QUIET_PATHS = frozenset({"/health"})

_AREAS = (("/admin", "admin"), ("/store", "store"), ("/uploads", "files"))


def api_area(path: str) -> str:
    for prefix, area in _AREAS:
        if path == prefix or path.startswith(prefix + "/"):
            return area
    return "other"


def client_address(request: Request) -> str:
    # First hop of X-Forwarded-For when running behind a proxy
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def actor_id(request: Request) -> Optional[str]:
    """Id of the admin user or customer resolved by the auth dependencies."""
    # A plain string: the ORM instance is detached once the session closes
    return getattr(request.state, "actor_id", None)


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s -> unhandled exception after %.1fms [%s]",
                request.method,
                path,
                (time.perf_counter() - started) * 1000,
                request_id_var.get(""),
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        area = api_area(path)
        actor = actor_id(request) or "-"
        logger.log(
            level_for(response.status_code),
            "%s %s -> %d in %.1fms [%s] area=%s actor=%s client=%s",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            area,
            actor,
            client_address(request),
            extra={"area": area, "actor": actor, "duration_ms": round(elapsed_ms, 2)},
        )
        return response
