# =============================================================================
# core/models/submission.py - Form Submission Schemas
# =============================================================================
# These models define the contract for the contact form:
# - Submission: The JSON body accepted by POST /submit
# - SubmissionRecord: One line of the append-only submission log
#
# Field rules (required, length, e-mail shape) are deliberately NOT declared
# here. Pydantic only checks the shape; core/validation.py applies the rules
# in a fixed order so clients get one specific reason back.
# =============================================================================

from datetime import datetime, timezone

from pydantic import BaseModel, Field, StrictStr, ValidationError

from app.exceptions import MalformedBodyError


class Submission(BaseModel):
    """
    Schema for a contact form submission.

    All three fields must be JSON strings. Unknown keys are ignored.

    Example:
        {
            "name": "Ann",
            "email": "ann@example.com",
            "message": "hi"
        }
    """

    name: StrictStr = Field(
        ...,
        description="Sender's name"
    )

    email: StrictStr = Field(
        ...,
        description="Sender's e-mail address"
    )

    message: StrictStr = Field(
        ...,
        description="Free-text message body"
    )


class SubmissionRecord(Submission):
    """
    A submission as written to the log, stamped with its arrival time.

    Serialized with model_dump_json(), which escapes control characters,
    so a record always fits on a single line.
    """

    received_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the submission was accepted (UTC)"
    )

    @classmethod
    def from_submission(cls, submission: Submission) -> "SubmissionRecord":
        """Stamp a validated submission with the current time."""
        return cls(**submission.model_dump())

    def to_log_line(self) -> str:
        """Render the record as one newline-terminated JSON line."""
        return self.model_dump_json() + "\n"


def parse_submission(body: bytes) -> Submission:
    """
    Parse a raw request body into a Submission.

    Args:
        body: Raw JSON bytes, already size-checked

    Returns:
        The parsed Submission (not yet validated against field rules)

    Raises:
        MalformedBodyError: If the body is not valid JSON or not the
            three-field object shape
    """
    try:
        return Submission.model_validate_json(body)
    except ValidationError as e:
        raise MalformedBodyError(f"{e.error_count()} error(s): {e.errors()[0]['msg']}")
