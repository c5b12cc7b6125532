"""
Main entrypoint for the Noïta API.

This module assembles the FastAPI application, sets up logging and
includes the versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``.  Run it with uvicorn or another ASGI server, e.g.::

    uvicorn noita_api.app.main:app --reload

Every error response uses the same envelope as successful ones:
``{"message": ..., "errors": [...]}``.
"""

import logging
import os
import time
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import AppError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _envelope(
    status_code: int,
    message: str,
    errors: Optional[List[str]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "errors": errors if errors is not None else [message]},
        headers=headers,
    )


def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the response envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        errors = [error.message for error in exc.errors] or None
        return _envelope(exc.status_code, exc.message, errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", _validation_messages(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, CORS, the error envelope, the API routes, the
    static image directory and the health and info documents.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging()

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.api_prefix)

    # StaticFiles refuses to start on a missing directory.
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount(settings.image_url_prefix, StaticFiles(directory=settings.upload_dir), name="images")

    endpoints = {
        "posts": f"{settings.api_prefix}/posts",
        "concerts": f"{settings.api_prefix}/concerts",
        "carousel": f"{settings.api_prefix}/carousel",
    }

    @app.get("/health", tags=["info"])
    async def health() -> dict:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - started_at,
        }

    @app.get("/", tags=["info"])
    async def root() -> dict:
        return {
            "message": f"Welcome to the {settings.project_name}",
            "version": settings.api_version,
            "api": settings.api_prefix,
            "health": "/health",
        }

    @app.get(settings.api_prefix, tags=["info"])
    async def api_info() -> dict:
        return {
            "message": settings.project_name,
            "version": settings.api_version,
            "endpoints": endpoints,
        }

    # Register startup event to apply migrations.
    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()
        logger.info("%s %s started", settings.project_name, settings.api_version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
