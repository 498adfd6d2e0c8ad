# =============================================================================
# core/services/static_service.py - Static File Resolution
# =============================================================================
# Maps untrusted request paths onto files inside a single static root.
#
# The containment check compares canonical paths (symlinks and ".." resolved),
# so neither "../" segments nor symlinks can reach outside the root.
# =============================================================================

import logging
import mimetypes
from pathlib import Path

from app.exceptions import FileReadFailureError

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


class StaticFileService:
    """
    Resolves and reads files under one static root directory.

    Holds no per-request state; one instance is shared by all requests.
    """

    def __init__(self, static_root: Path, default_document: str = "form.html"):
        self.static_root = Path(static_root)
        self.default_document = default_document

    def resolve(self, request_path: str) -> Path | None:
        """
        Map a request path to a readable location inside the static root.

        Args:
            request_path: The URL path as received, e.g. "/" or "/css/site.css"

        Returns:
            The canonical path of an existing file or directory inside the
            root, or None if the path is missing or escapes the root
        """
        if request_path == "/":
            relative = self.default_document
        else:
            relative = request_path[1:]

        candidate = self.static_root / relative

        try:
            root = self.static_root.resolve()
            resolved = candidate.resolve()
            if not candidate.exists():
                return None
        except (OSError, ValueError) as e:
            logger.debug(f"Could not resolve {request_path!r}: {e}")
            return None

        if not resolved.is_relative_to(root):
            return None

        return resolved

    def read(self, path: Path) -> bytes:
        """
        Read a resolved file in full.

        Args:
            path: A path previously returned by resolve()

        Returns:
            The file contents as opaque bytes

        Raises:
            FileReadFailureError: If the file cannot be read (directory,
                permissions, removed since resolution, ...)
        """
        try:
            return path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read file {path}: {e}")
            raise FileReadFailureError(str(path), str(e))

    @staticmethod
    def guess_media_type(path: Path) -> str:
        """Infer a Content-Type from the file extension."""
        media_type, _ = mimetypes.guess_type(path.name)
        return media_type or DEFAULT_MEDIA_TYPE
