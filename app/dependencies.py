# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the per-process resources built by
# create_app(). These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services import StaticFileService, SubmissionLog


def get_app_settings(request: Request) -> Settings:
    """Get the Settings the app was created with."""
    return request.app.state.settings


def get_static_files(request: Request) -> StaticFileService:
    """Get the static file service bound to the configured root."""
    return request.app.state.static_files


def get_submission_log(request: Request) -> SubmissionLog:
    """Get the shared submission log."""
    return request.app.state.submission_log


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
StaticFilesDep = Annotated[StaticFileService, Depends(get_static_files)]
SubmissionLogDep = Annotated[SubmissionLog, Depends(get_submission_log)]
