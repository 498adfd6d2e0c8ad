# =============================================================================
# app/routers/static.py - Static File Endpoint
# =============================================================================
# GET on any path serves a file from the static root.
#   - path escapes the root or does not exist -> 400
#   - file exists but cannot be read          -> 500
# =============================================================================

import logging

from fastapi import APIRouter, Response
from fastapi.concurrency import run_in_threadpool

from app.dependencies import StaticFilesDep
from app.exceptions import InvalidPathError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{request_path:path}", include_in_schema=False)
async def serve_file(request_path: str, static_files: StaticFilesDep) -> Response:
    """
    Serve a static file.

    GET / serves the default document. The content type is inferred from
    the file extension.
    """
    url_path = "/" + request_path
    resolved = static_files.resolve(url_path)

    if resolved is None:
        logger.warning(f"Attempted to access invalid path: {url_path}")
        raise InvalidPathError(url_path)

    contents = await run_in_threadpool(static_files.read, resolved)

    return Response(
        content=contents,
        media_type=static_files.guess_media_type(resolved),
    )
