"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orderdesk.config import Settings
from orderdesk.infrastructure.api import order_routes, product_routes
from orderdesk.infrastructure.api.errors import register_exception_handlers
from orderdesk.infrastructure.api.limits import install_body_limit, install_rate_limit
from orderdesk.infrastructure.api.responses import success
from orderdesk.infrastructure.bootstrap import Container, build_container, running
from orderdesk.infrastructure.logging_setup import configure_logging

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(
    container: Container | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API.

    Without an explicit ``container`` the app is wired to MongoDB using
    ``settings`` (or the environment) and configures logging itself.
    """
    settings = settings or Settings.from_env()
    if container is None:
        configure_logging(settings.log_level)
        container = build_container(settings)
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        with running(container):
            logger.info("orderdesk API %s started", VERSION)
            yield
        logger.info("orderdesk API stopped")

    app = FastAPI(title="orderdesk", version=VERSION, lifespan=lifespan)
    app.state.container = container

    register_exception_handlers(app)
    if settings.rate_limit:
        install_rate_limit(app, settings.rate_limit)
    install_body_limit(app, settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (product_routes.router, order_routes.router):
        app.include_router(router, prefix="/api")
        app.include_router(router, include_in_schema=False)

    @app.get("/health")
    def health(request: Request) -> JSONResponse:
        database = "connected" if request.app.state.container.database_ok() else "unavailable"
        return success(
            "orderdesk API is running",
            uptime=round(time.monotonic() - started, 3),
            database=database,
        )

    @app.get("/")
    def index() -> JSONResponse:
        return success(
            "Welcome to the orderdesk product and order API",
            version=VERSION,
            endpoints={
                "products": {
                    "create": "POST /api/products",
                    "list": "GET /api/products",
                    "get": "GET /api/products/{id}",
                },
                "orders": {
                    "create": "POST /api/orders",
                    "list": "GET /api/orders",
                    "get": "GET /api/orders/{id}",
                },
                "health": "GET /health",
            },
        )

    return app
