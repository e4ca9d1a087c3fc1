"""FastAPI application with lifespan, error handlers and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dsnreport.api.routes import dsn, health
from dsnreport.core.config import AppSettings
from dsnreport.core.exceptions import (
    DsnParseError,
    SessionNotFoundError,
    UnknownQuestionError,
    UploadValidationError,
)
from dsnreport.core.logging import configure_logging
from dsnreport.persistence import create_cache
from dsnreport.services.session import DsnSessionService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging once the app actually starts serving."""
    settings: AppSettings = app.state.settings
    configure_logging(settings.log_level)
    logger.info("Environment: %s", settings.environment)
    yield
    logger.info("Shutting down gracefully...")


def _register_error_handlers(app: FastAPI, settings: AppSettings) -> None:
    @app.exception_handler(UploadValidationError)
    async def upload_error(request: Request, exc: UploadValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid file", "details": exc.reason})

    @app.exception_handler(DsnParseError)
    async def parse_error(request: Request, exc: DsnParseError) -> JSONResponse:
        logger.error("DSN parsing failed: %s", exc)
        return JSONResponse(
            status_code=422, content={"error": "Failed to parse DSN file", "details": str(exc.cause)},
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(request: Request, exc: SessionNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Session not found", "session_id": exc.session_id})

    @app.exception_handler(UnknownQuestionError)
    async def unknown_question(request: Request, exc: UnknownQuestionError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Unknown question", "question_id": exc.question_id})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse(
                status_code=404,
                content={"error": "Route not found", "path": request.url.path, "method": request.method},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def global_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Global Error: %s", exc, exc_info=exc)
        content: dict[str, str] = {"error": "Internal Server Error"}
        if settings.environment == "development":
            content["message"] = str(exc)
        return JSONResponse(status_code=500, content=content)


def create_app(settings: Optional[AppSettings] = None,
               session_service: Optional[DsnSessionService] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = AppSettings()
    if session_service is None:
        session_service = DsnSessionService(
            create_cache(settings), ttl_seconds=settings.cache.session_ttl_seconds,
        )

    app = FastAPI(
        title="DSN Report API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.sessions = session_service

    app.add_middleware(CORSMiddleware, allow_origins=[settings.api.cors_origin],
                       allow_methods=["*"], allow_headers=["*"])
    _register_error_handlers(app, settings)

    app.include_router(health.router, prefix="/api")
    app.include_router(dsn.router, prefix="/api")
    return app


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    import uvicorn

    settings = AppSettings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.api.port)


if __name__ == "__main__":
    run()
