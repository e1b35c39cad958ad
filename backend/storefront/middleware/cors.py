"""
Storefront Backend — Per-Area CORS
====================================

What:  Applies different CORS policies to the /store and /admin APIs.
Why:   The storefront and the admin dashboard are served from different
       origins; each API area should only trust its own clients.
How:   One Starlette CORSMiddleware per path prefix. The first matching
       prefix handles the request (including preflight OPTIONS); requests
       outside every prefix pass through untouched.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class ScopedCORSMiddleware:
    """
    ASGI middleware dispatching to a per-prefix CORSMiddleware.

    Example:
        app.add_middleware(
            ScopedCORSMiddleware,
            origins_by_prefix={
                "/store": ["http://localhost:8000"],
                "/admin": ["http://localhost:7000"],
            },
        )
    """

    def __init__(self, app: ASGIApp, origins_by_prefix: Dict[str, Sequence[str]]):
        self.app = app
        self._scoped: List[Tuple[str, ASGIApp]] = []
        for prefix, origins in origins_by_prefix.items():
            self._scoped.append(
                (
                    prefix.rstrip("/"),
                    CORSMiddleware(
                        app,
                        allow_origins=list(origins),
                        allow_credentials=True,
                        allow_methods=["*"],
                        allow_headers=["*"],
                        expose_headers=["X-Request-ID", "X-Total-Count"],
                    ),
                )
            )
            logger.debug("CORS for %s allows %s", prefix, list(origins))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope.get("path", "")
            for prefix, handler in self._scoped:
                if path == prefix or path.startswith(prefix + "/"):
                    await handler(scope, receive, send)
                    return
        await self.app(scope, receive, send)
