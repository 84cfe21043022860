"""
FastAPI application exposing the catalog and review endpoints.

Application errors are translated into flat JSON error responses here;
nothing below the HTTP layer knows about status codes.
"""

import logging
import re
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..application.domain import CatalogResponse, ReviewResponse
from ..application.exceptions import AppFeedError, ClientInputError
from ..application.service import AppService
from ..infrastructure.containers import Container

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_hours(raw: Optional[str]) -> int:
    """
    Parses the optional `hours` query parameter.

    Raises:
        ClientInputError: If the value is not a non-negative integer.
    """
    if raw is None or raw == "":
        return 0
    if not _INTEGER.fullmatch(raw):
        raise ClientInputError(f"Invalid 'hours' parameter: {raw!r}")
    try:
        hours = int(raw)
    except ValueError as e:
        # Exceeds the interpreter limit on integer string length.
        raise ClientInputError(f"Invalid 'hours' parameter: {raw[:20]!r}...") from e
    if hours < 0:
        raise ClientInputError(f"Invalid 'hours' parameter: {raw!r}")
    return hours


def get_app_service(request: Request) -> AppService:
    return request.app.state.container.app_service()


async def handle_client_error(request: Request, exc: ClientInputError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def handle_app_error(request: Request, exc: AppFeedError):
    logger.error(
        f"{request.method} {request.url.path} failed with "
        f"{type(exc).__name__}: {exc}"
    )
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Builds the FastAPI application around a DI container."""

    container = container or Container()
    settings = container.config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await container.http_client().aclose()

    app = FastAPI(title="App Feed Proxy", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ClientInputError, handle_client_error)
    app.add_exception_handler(AppFeedError, handle_app_error)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Request: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | Duration: {duration_ms:.1f}ms"
        )
        return response

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": str(settings.get("app_version", "")),
        }

    @app.get("/app/list", response_model=List[CatalogResponse])
    async def list_apps(service: AppService = Depends(get_app_service)):
        logger.info("Processing app list request")
        apps = await service.get_apps()
        logger.info(f"Successfully returned app list, count={len(apps)}")
        return apps

    @app.get("/app/reviews", response_model=List[ReviewResponse])
    async def list_reviews(
        id: Optional[str] = None,
        hours: Optional[str] = None,
        service: AppService = Depends(get_app_service),
    ):
        if not id:
            raise ClientInputError("Missing 'id' query parameter")
        window = parse_hours(hours)

        logger.info(f"Processing app reviews request, app={id} hours={window}")
        reviews = await service.get_reviews(id, window)
        logger.info(f"Successfully returned {len(reviews)} reviews, app={id}")
        return reviews

    return app
