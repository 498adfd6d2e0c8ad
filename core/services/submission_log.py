# =============================================================================
# core/services/submission_log.py - Append-Only Submission Log
# =============================================================================
# Persists accepted submissions as JSON lines in a single file.
#
# - The file is created owner read/write only (0600); submissions carry
#   personal data.
# - Each record is written to an O_APPEND descriptor, continuing after short
#   writes, and writers are serialized by a lock, so lines never interleave.
# - Existing content is never truncated or rewritten.
# =============================================================================

import logging
import os
import stat
import threading
from pathlib import Path

from app.exceptions import PersistenceError
from core.models.submission import Submission, SubmissionRecord

logger = logging.getLogger(__name__)

LOG_FILE_MODE = 0o600


class SubmissionLog:
    """
    Append-only log of accepted form submissions.

    Safe to share between threads: appends from concurrent requests are
    serialized by an internal lock.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def append(self, submission: Submission) -> SubmissionRecord:
        """
        Append one submission as a single line.

        Args:
            submission: A submission that already passed validation

        Returns:
            The record that was written

        Raises:
            PersistenceError: If the log cannot be opened or written
        """
        record = SubmissionRecord.from_submission(submission)
        data = record.to_log_line().encode("utf-8")

        with self._lock:
            try:
                fd = os.open(
                    self.path,
                    os.O_WRONLY | os.O_CREAT | os.O_APPEND,
                    LOG_FILE_MODE,
                )
            except OSError as e:
                logger.error(f"Failed to open submission log {self.path}: {e}")
                raise PersistenceError(str(self.path), str(e))

            try:
                self._restrict_permissions(fd)
                self._write_all(fd, data)
            except OSError as e:
                logger.error(f"Failed to write to submission log {self.path}: {e}")
                raise PersistenceError(str(self.path), str(e))
            finally:
                os.close(fd)

        return record

    @staticmethod
    def _write_all(fd: int, data: bytes) -> None:
        """Write every byte, continuing after short writes."""
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            if written == 0:
                raise OSError(f"write made no progress with {len(view)} bytes left")
            view = view[written:]

    def _restrict_permissions(self, fd: int) -> None:
        """Tighten a pre-existing log that grants group or world access."""
        mode = stat.S_IMODE(os.fstat(fd).st_mode)
        if mode & 0o077:
            logger.warning(
                f"Submission log {self.path} had mode {oct(mode)}, "
                f"restricting to {oct(LOG_FILE_MODE)}"
            )
            os.fchmod(fd, LOG_FILE_MODE)
