# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .static_service import StaticFileService
from .submission_log import SubmissionLog

__all__ = [
    "StaticFileService",
    "SubmissionLog",
]
