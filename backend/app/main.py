"""
StrayLink Backend — Application Entry Point
=============================================

What:  Builds the FastAPI app: logging, middleware, error envelope, routers.
Run:   uvicorn app.main:app

Request path:

    client ─▶ RateLimit ─▶ RequestID ─▶ Logging ─▶ GZip ─▶ CORS ─▶ router
                                                             │
          /share/article, /share/pet      HTML preview pages ┤
          /api/articles/{slug_or_id}      article reader     ┤
          /api/reports/map                report markers     ┤
          /health                         database probe     ┘

Errors raised as StrayLinkError subclasses become the JSON envelope
{error, message, details?, request_id}; anything else is a generic 500.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import StrayLinkError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import articles, health, reports, share

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that log every connection or statement at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg")


def setup_logging() -> None:
    """Root logger to stdout at LOG_LEVEL; replaces any earlier config."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("StrayLink Backend %s starting", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: health checks and share fallbacks still work
        logger.error("Configuration problems found:\n%s", str(e))

    logger.info("Public site: %s", settings.site_url or "(derived from request headers)")
    logger.info("Listening on http://%s:%d (docs at /docs)", settings.backend_host, settings.backend_port)

    yield

    logger.info("StrayLink Backend shutting down")
    await dispose_engine()
    logger.info("Database pool closed")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to JSON error responses.

        StrayLinkError and subclasses → exc.status_code, exc.to_payload()
        Exception (fallback)          → 500, generic message

    4xx are logged at WARNING (404 not at all), 5xx at ERROR with their
    context. Stack traces and SQL never reach the response body.
    """

    @app.exception_handler(StrayLinkError)
    async def handle_application_error(request: Request, exc: StrayLinkError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
            )
        elif exc.status_code != 404:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(rid),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title="StrayLink API",
        description=(
            "Backend of a community platform for stray animals: social-preview pages for "
            "shared articles and pets, the knowledge article reader, and the sighting "
            "report map."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration, so the
    # rate limiter added last sees the request first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    for module in (share, articles, reports, health):
        app.include_router(module.router)

    return app


app = create_app()
