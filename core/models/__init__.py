# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - submission.py: Contact form submission and its log record
# =============================================================================

from .submission import (
    Submission,
    SubmissionRecord,
    parse_submission,
)

__all__ = [
    "Submission",
    "SubmissionRecord",
    "parse_submission",
]
