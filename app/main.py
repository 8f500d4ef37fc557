"""
Subscription Tracker - FastAPI Application
Recurring subscription records and billing totals per month period
"""
from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import health
from app.api.v1 import subscriptions
from app.config import Settings, get_settings
from app.core.exceptions import (
    AppError,
    NoMatchesFoundError,
    PersistenceError,
    SubscriptionNotFoundError,
    SubscriptionValidationError,
)
from app.core.logging import setup_logging
from app.database import create_db_engine, create_session_factory, init_db
from app.repositories.memory import InMemorySubscriptionRepository

logger = logging.getLogger(__name__)


def _init_storage(app: FastAPI, settings: Settings) -> None:
    app.state.engine = None
    app.state.session_factory = None
    app.state.memory_repository = None

    if settings.storage_backend == "memory":
        app.state.memory_repository = InMemorySubscriptionRepository()
        logger.info("Using in-memory subscription storage")
        return

    engine = create_db_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    if settings.db_create_tables:
        init_db(engine)
        logger.info("Database initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} ({settings.app_env})...")
    _init_storage(app, settings)
    yield
    if app.state.engine is not None:
        app.state.engine.dispose()
    logger.info(f"Shutting down {settings.app_name}...")


def _error_response(status_code: int, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SubscriptionValidationError)
    async def validation_error_handler(request: Request, exc: SubscriptionValidationError):
        logger.warning(f"Validation failed on {request.url.path}: {exc.kind} {exc.message}")
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(SubscriptionNotFoundError)
    async def not_found_error_handler(request: Request, exc: SubscriptionNotFoundError):
        logger.info(f"Not found on {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(NoMatchesFoundError)
    async def no_matches_handler(request: Request, exc: NoMatchesFoundError):
        logger.info(f"No matches on {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error(f"Storage failure on {request.url.path}: {exc.message}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "kind": exc.kind, "field": None},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Track recurring user subscriptions and their billing totals",
        version="1.0.0",
        debug=settings.app_debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response

    @app.get("/")
    async def root() -> dict:
        return {
            "name": settings.app_name,
            "environment": settings.app_env,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(
        subscriptions.router,
        prefix=f"{settings.api_v1_prefix.rstrip('/')}/subscriptions",
        tags=["Subscriptions"],
    )
    return app


def run() -> None:
    load_dotenv(os.getenv("ENV_FILE", ".env"))
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_level=(settings.log_level or "info").lower(),
    )


if __name__ == "__main__":
    run()
