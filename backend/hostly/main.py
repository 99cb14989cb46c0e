# backend/hostly/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hostly.api.api import api_router
from hostly.core.config import Settings, settings as default_settings
from hostly.core.log_config import configure_logging
from hostly.domain.errors import PropertyNotFoundError, PropertyValidationError
from hostly.repositories.property_store import PropertyStore
from hostly.services.feed_parser import FeedParser
from hostly.services.ical_fetcher import IcalFetcher
from hostly.services.ical_sync_service import IcalSyncService
from hostly.services.scheduler import shutdown_scheduler, start_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI Lifespan - 앱 시작/종료 시 실행
    """
    settings: Settings = app.state.settings

    # Startup
    if settings.SCHEDULER_ENABLED:
        start_scheduler(app.state.sync_service, cron_minute=settings.SYNC_CRON_MINUTE)

    logger.info(f"{settings.APP_NAME} running on port {settings.PORT}")
    logger.info(f"   Sync schedule: every hour at minute {settings.SYNC_CRON_MINUTE:02d}")
    logger.info("   Endpoints:")
    logger.info("     GET  /reservations")
    logger.info("     POST /properties")
    logger.info("     POST /sync")
    yield
    # Shutdown
    if settings.SCHEDULER_ENABLED:
        shutdown_scheduler()


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PropertyValidationError)
    async def handle_validation_error(request: Request, exc: PropertyValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    @app.exception_handler(PropertyNotFoundError)
    async def handle_not_found(request: Request, exc: PropertyNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Property not found"},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Invalid request: {location} {first.get('msg', '')}".strip()},
        )


def create_app(
    settings: Optional[Settings] = None,
    *,
    fetcher: Optional[IcalFetcher] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    fetcher = fetcher or IcalFetcher(
        timeout=settings.ICAL_FETCH_TIMEOUT_SECONDS,
        max_attempts=settings.ICAL_FETCH_MAX_ATTEMPTS,
        backoff_seconds=settings.ICAL_FETCH_BACKOFF_SECONDS,
    )
    store = PropertyStore()
    sync_service = IcalSyncService(store=store, parser=FeedParser(fetcher))

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.sync_service = sync_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
