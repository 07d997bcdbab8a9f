"""CORS Policy - exactly one allowed browser origin, everything else blocked.

Invariants:
    - A request whose Origin header differs from FRONTEND_URL gets 403 and
      never reaches routing (preflights included)
    - A request without an Origin header is rejected the same way, unless
      CORS_ALLOW_MISSING_ORIGIN is enabled
    - CORS response headers for the allowed origin come from Starlette's CORSMiddleware

Design Decisions:
    - CORSMiddleware alone only omits headers for foreign origins and still runs
      the handler; StrictOriginMiddleware turns that into a hard rejection
"""

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from products_api.core.errors import CorsOriginError

logger = logging.getLogger(__name__)


def is_origin_allowed(
    origin: str | None, allowed_origin: str, allow_missing: bool = False,
) -> bool:
    if origin is None:
        return allow_missing
    return origin == allowed_origin


class StrictOriginMiddleware(BaseHTTPMiddleware):
    """Reject requests from any origin other than the configured one."""

    def __init__(self, app, allowed_origin: str, allow_missing: bool = False):
        super().__init__(app)
        self.allowed_origin = allowed_origin
        self.allow_missing = allow_missing

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")
        if is_origin_allowed(origin, self.allowed_origin, self.allow_missing):
            return await call_next(request)
        exc = CorsOriginError(origin)
        logger.warning(
            f"CORS rejection for origin {origin!r} on {request.url.path}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def register_cors(
    app: FastAPI, allowed_origin: str, allow_missing: bool = False,
) -> None:
    """Install CORS headers first, then the strict check in front of them."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[allowed_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        StrictOriginMiddleware,
        allowed_origin=allowed_origin,
        allow_missing=allow_missing,
    )
