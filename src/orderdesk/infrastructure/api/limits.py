"""Per-client request throttling and the request body size cap."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from orderdesk.infrastructure.api.responses import error

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def handle_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Must stay synchronous: SlowAPIMiddleware calls it without awaiting
    logger.info(
        "Rate limit %s exceeded by %s on %s",
        exc.detail, get_remote_address(request), request.url.path,
    )
    return error(RATE_LIMIT_MESSAGE, 429, code="RATE_LIMIT_EXCEEDED")


def install_rate_limit(app: FastAPI, limit: str) -> None:
    """Apply ``limit`` (e.g. ``"100/15minutes"``) per client address, shared by every route."""
    app.state.limiter = Limiter(key_func=get_remote_address, application_limits=[limit])
    app.add_exception_handler(RateLimitExceeded, handle_rate_limited)
    app.add_middleware(SlowAPIMiddleware)


def install_body_limit(app: FastAPI, max_bytes: int) -> None:
    """Refuse requests whose declared Content-Length exceeds ``max_bytes``."""

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length", "")
        if length.isdigit() and int(length) > max_bytes:
            return error(
                "Request body too large",
                413,
                [f"Request bodies are limited to {max_bytes} bytes"],
                "PAYLOAD_TOO_LARGE",
            )
        return await call_next(request)
