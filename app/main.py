# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the form server.
# It configures logging, builds the per-process services from Settings, and
# wires middleware, exception handlers and routers.
#
# Usage:
#   poetry run uvicorn app.main:app
#   poetry run form-server
# =============================================================================

import logging

import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings as default_settings
from app.exceptions import (
    FormServerException,
    form_server_exception_handler,
    http_exception_handler,
)
from app.middleware import SecurityHeadersMiddleware
from app.routers import static, submit
from core.services import StaticFileService, SubmissionLog

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure the root logger for the process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application for the given settings.

    The static root and submission log are bound here, once, and shared
    by every request through app.state.

    Args:
        settings: Configuration to use (defaults to the environment)

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings

    # Interactive docs would shadow static paths like /docs
    app = FastAPI(
        title="Secure Form Server",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.static_files = StaticFileService(
        settings.STATIC_ROOT,
        settings.DEFAULT_DOCUMENT,
    )
    app.state.submission_log = SubmissionLog(settings.SUBMISSION_LOG_PATH)

    # =========================================================================
    # Middleware
    # =========================================================================

    # Added last, so it wraps everything else
    app.add_middleware(SecurityHeadersMiddleware)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(FormServerException, form_server_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # POST /submit first; the static router's GET catch-all comes last
    app.include_router(submit.router)
    app.include_router(static.router)

    logger.info(
        f"Serving {settings.STATIC_ROOT} in {settings.ENVIRONMENT} mode, "
        f"submissions -> {settings.SUBMISSION_LOG_PATH}"
    )

    return app


configure_logging(default_settings)
app = create_app()


def run() -> None:
    """Start the server on the configured address."""
    logger.info("Secure web server starting...")
    logger.info(f"Server running on http://{default_settings.API_HOST}:{default_settings.API_PORT}")
    uvicorn.run(
        app,
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
