# =============================================================================
# app/routers/submit.py - Form Submission Pipeline
# =============================================================================
# Handles POST /submit. Each step can end the request early:
#   1. Content-Type must be application/json       -> 415
#   2. Body read, capped at MAX_BODY_BYTES         -> 413 (408 if too slow)
#   3. Body parsed as {name, email, message}       -> 400
#   4. Field rules                                 -> 400 with the reason
#   5. Appended to the submission log              -> logged on failure
#   6. Acknowledgement                             -> 200
# =============================================================================

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from app.dependencies import SettingsDep, SubmissionLogDep
from app.exceptions import (
    PayloadTooLargeError,
    PersistenceError,
    RequestTimeoutError,
    UnsupportedMediaTypeError,
    ValidationFailureError,
)
from core.models.submission import parse_submission
from core.validation import validate_submission

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_MEDIA_TYPE = "application/json"
ACKNOWLEDGEMENT = "Thank you! Your message was received."


# =============================================================================
# Helper Functions
# =============================================================================

def is_json_content_type(content_type: str | None) -> bool:
    """
    Check whether a Content-Type header declares JSON.

    Parameters such as charset are ignored; the media type is compared
    case-insensitively.
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_MEDIA_TYPE


async def read_limited_body(request: Request, max_bytes: int) -> bytes:
    """
    Read the request body, giving up as soon as it exceeds max_bytes.

    A declared Content-Length over the limit is rejected before reading.

    Raises:
        PayloadTooLargeError: If the body is larger than max_bytes
    """
    declared = request.headers.get("content-length")
    # Unicode digits such as superscripts pass isdigit() but not int()
    if declared is not None and declared.isascii() and declared.isdigit():
        if int(declared) > max_bytes:
            raise PayloadTooLargeError(int(declared), max_bytes)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLargeError(len(body), max_bytes)

    return bytes(body)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/submit", response_class=PlainTextResponse, include_in_schema=False)
async def submit_form(
    request: Request,
    settings: SettingsDep,
    submission_log: SubmissionLogDep,
) -> PlainTextResponse:
    """
    Accept a contact form submission.

    The body is read and parsed by hand rather than through a pydantic body
    parameter, so that media type and size are checked before any parsing.
    """
    # =========================================================================
    # 1. Media Type
    # =========================================================================

    content_type = request.headers.get("content-type")
    if not is_json_content_type(content_type):
        logger.warning(f"Unsupported content type: {content_type!r}")
        raise UnsupportedMediaTypeError(content_type)

    # =========================================================================
    # 2. Bounded Body Read
    # =========================================================================

    try:
        body = await asyncio.wait_for(
            read_limited_body(request, settings.MAX_BODY_BYTES),
            timeout=settings.BODY_READ_TIMEOUT_SECONDS,
        )
    except PayloadTooLargeError as e:
        logger.warning(
            f"Rejected large payload: {e.details['size_bytes']} bytes "
            f"(max {settings.max_body_kib:g} KiB)"
        )
        raise
    except asyncio.TimeoutError:
        raise RequestTimeoutError(settings.BODY_READ_TIMEOUT_SECONDS)

    # =========================================================================
    # 3. Parse
    # =========================================================================

    submission = parse_submission(body)
    logger.debug(f"Parsed form data: {submission!r}")

    # =========================================================================
    # 4. Validate
    # =========================================================================

    reason = validate_submission(submission)
    if reason is not None:
        logger.warning(f"Validation error: {reason}")
        raise ValidationFailureError(reason)

    # =========================================================================
    # 5. Persist
    # =========================================================================

    try:
        await run_in_threadpool(submission_log.append, submission)
        logger.info(f"Successfully saved submission for {submission.email}")
    except PersistenceError as e:
        logger.error(f"Submission from {submission.email} was not saved: {e.details}")
        if settings.FAIL_ON_PERSISTENCE_ERROR:
            raise

    # =========================================================================
    # 6. Acknowledge
    # =========================================================================

    return PlainTextResponse(ACKNOWLEDGEMENT)
