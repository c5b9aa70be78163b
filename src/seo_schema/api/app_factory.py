"""
Application factory for building the FastAPI app.

Used by ``seo_schema.api.main`` (imported by run_api.py under Uvicorn) and by
tests, which pass their own Settings instance.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .config import Settings, get_settings, settings as global_settings
from .exceptions import APIException
from .app_logging import setup_logging, get_logger, get_request_id
from .middleware import CORSMiddleware, RequestIDMiddleware
from .models import HealthResponse


def create_app(custom_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI ASGI application.

    Args:
        custom_settings: Optional Settings instance. If omitted, the global
            Settings object that is shared across modules will be used.
    """

    active_settings = custom_settings or global_settings
    setup_logging(level=active_settings.effective_log_level, use_json=active_settings.log_json)
    app_logger = get_logger(__name__)

    app_logger.info(
        "Starting application",
        extra={
            "environment": active_settings.environment,
            "debug": active_settings.debug,
            "max_graph_depth": active_settings.max_graph_depth,
        },
    )

    app = FastAPI(
        title=active_settings.app_name,
        description="Validates and repairs schema.org JSON-LD structured data before publishing",
        version=active_settings.app_version,
    )

    if custom_settings is not None:
        app.dependency_overrides[get_settings] = lambda: custom_settings

    from .structured_data import router as structured_data_router

    app.include_router(structured_data_router)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="healthy", version=active_settings.app_version)

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):  # pragma: no cover - FastAPI wiring
        """Catch all unhandled exceptions and log them."""
        if isinstance(exc, APIException):
            raise exc

        request_id = get_request_id()
        app_logger.error(
            "Unhandled exception",
            exc_info=True,
            extra={
                "path": request.url.path,
                "method": request.method,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if active_settings.debug else "An error occurred",
                "error_type": type(exc).__name__,
                "request_id": request_id,
            }
        )

    @app.exception_handler(APIException)
    async def api_exception_handler(request, exc):
        request_id = get_request_id()
        app_logger.warning(
            "APIException handled",
            extra={
                "status_code": exc.status_code,
                "error_code": exc.error_code,
                "detail": exc.detail,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "error_code": exc.error_code, "request_id": request_id},
            headers=exc.headers,
        )

    # Middleware executes in reverse order of registration.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=active_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    return app


__all__ = ["create_app"]
