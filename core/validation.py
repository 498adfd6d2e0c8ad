# =============================================================================
# core/validation.py - Form Field Rules
# =============================================================================
# Pure checks applied to a parsed Submission before it is persisted.
#
# Rules run in a fixed order and the first one that fails decides the reason
# returned to the client:
#   1. all fields present (non-blank)
#   2. name length
#   3. email length
#   4. message length
#   5. email shape
#   6. no <script> in message
# =============================================================================

import re

from core.models.submission import Submission

MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 100
MAX_MESSAGE_LENGTH = 1000

# local@domain.tld, nothing more: no '@' or whitespace in any part.
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

UNSAFE_MARKUP = "<script>"

REQUIRED_FIELDS_REASON = "All fields are required."
NAME_TOO_LONG_REASON = f"Name is too long (max {MAX_NAME_LENGTH} characters)."
EMAIL_TOO_LONG_REASON = f"Email is too long (max {MAX_EMAIL_LENGTH} characters)."
MESSAGE_TOO_LONG_REASON = f"Message is too long (max {MAX_MESSAGE_LENGTH} characters)."
INVALID_EMAIL_REASON = "Invalid email format."
UNSAFE_CONTENT_REASON = "Message contains potentially unsafe content."


def is_valid_email(email: str) -> bool:
    """Check that the whole string is shaped like local@domain.tld."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_submission(submission: Submission) -> str | None:
    """
    Check a submission against the form rules.

    Lengths are counted in characters, not encoded bytes.

    Args:
        submission: Parsed form submission

    Returns:
        The reason for the first rule that fails, or None if all pass

    Example:
        >>> validate_submission(Submission(name="", email="a@b.c", message="hi"))
        'All fields are required.'
    """
    if (
        not submission.name.strip()
        or not submission.email.strip()
        or not submission.message.strip()
    ):
        return REQUIRED_FIELDS_REASON

    if len(submission.name) > MAX_NAME_LENGTH:
        return NAME_TOO_LONG_REASON

    if len(submission.email) > MAX_EMAIL_LENGTH:
        return EMAIL_TOO_LONG_REASON

    if len(submission.message) > MAX_MESSAGE_LENGTH:
        return MESSAGE_TOO_LONG_REASON

    if not is_valid_email(submission.email):
        return INVALID_EMAIL_REASON

    if UNSAFE_MARKUP in submission.message:
        return UNSAFE_CONTENT_REASON

    return None
