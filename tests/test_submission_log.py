# =============================================================================
# tests/test_submission_log.py - Submission Log Tests
# =============================================================================
# Unit tests for SubmissionLog:
# - Owner-only permissions on create (and tightened on existing files)
# - Append-only: earlier content is kept
# - Concurrent appends produce whole, non-interleaved lines
# - I/O failures surface as PersistenceError
# =============================================================================

import json
import os
import stat
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from app.exceptions import PersistenceError
from core.models.submission import Submission
from core.services.submission_log import SubmissionLog


def make_submission(index: int = 0) -> Submission:
    return Submission(
        name=f"Person {index}",
        email=f"person{index}@example.com",
        message=f"message number {index} " + "x" * 500,
    )


def read_lines(path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestAppend:
    """Tests for SubmissionLog.append()."""

    def test_creates_file_with_one_line(self, log_path):
        SubmissionLog(log_path).append(
            Submission(name="Ann", email="ann@example.com", message="hi")
        )

        lines = read_lines(log_path)
        assert len(lines) == 1
        assert lines[0]["name"] == "Ann"
        assert lines[0]["email"] == "ann@example.com"
        assert lines[0]["message"] == "hi"

    def test_returns_written_record(self, log_path):
        record = SubmissionLog(log_path).append(make_submission(7))

        assert read_lines(log_path)[0]["received_at"] == record.model_dump(mode="json")["received_at"]

    def test_new_file_is_owner_only(self, log_path):
        SubmissionLog(log_path).append(make_submission())

        assert stat.S_IMODE(os.stat(log_path).st_mode) == 0o600

    def test_existing_permissive_file_is_tightened(self, log_path):
        log_path.write_text("")
        os.chmod(log_path, 0o644)

        SubmissionLog(log_path).append(make_submission())

        assert stat.S_IMODE(os.stat(log_path).st_mode) == 0o600

    def test_existing_content_preserved(self, log_path):
        log_path.write_text('{"earlier": "entry"}\n')

        log = SubmissionLog(log_path)
        log.append(make_submission(1))
        log.append(make_submission(2))

        lines = read_lines(log_path)
        assert lines[0] == {"earlier": "entry"}
        assert [line["name"] for line in lines[1:]] == ["Person 1", "Person 2"]

    def test_separate_instances_share_the_file(self, log_path):
        SubmissionLog(log_path).append(make_submission(1))
        SubmissionLog(log_path).append(make_submission(2))

        assert len(read_lines(log_path)) == 2


class TestConcurrentAppend:
    """Appends from many threads never interleave."""

    def test_two_concurrent_submissions(self, log_path):
        log = SubmissionLog(log_path)

        with ThreadPoolExecutor(max_workers=2) as pool:
            list(pool.map(log.append, [make_submission(1), make_submission(2)]))

        names = sorted(line["name"] for line in read_lines(log_path))
        assert names == ["Person 1", "Person 2"]

    def test_many_concurrent_submissions(self, log_path):
        log = SubmissionLog(log_path)
        count = 200

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(log.append, [make_submission(i) for i in range(count)]))

        # Every line must parse on its own; a torn write would break json.loads
        lines = read_lines(log_path)
        assert len(lines) == count
        assert {line["name"] for line in lines} == {f"Person {i}" for i in range(count)}


class TestFailures:
    """I/O errors become PersistenceError."""

    def test_log_path_is_directory(self, tmp_path):
        directory = tmp_path / "logdir"
        directory.mkdir()

        with pytest.raises(PersistenceError) as exc_info:
            SubmissionLog(directory).append(make_submission())

        assert exc_info.value.status_code == 500
        assert exc_info.value.details["path"] == str(directory)

    def test_missing_parent_directory(self, tmp_path):
        log = SubmissionLog(tmp_path / "missing" / "log.txt")

        with pytest.raises(PersistenceError):
            log.append(make_submission())


class TestShortWrites:
    """A record split across several os.write calls still lands whole."""

    def test_record_completed_after_short_writes(self, log_path):
        real_write = os.write
        calls = []

        def write_seven_bytes(fd, data):
            calls.append(len(data))
            return real_write(fd, bytes(data[:7]))

        log = SubmissionLog(log_path)
        with patch("core.services.submission_log.os.write", side_effect=write_seven_bytes):
            log.append(make_submission(1))
        log.append(make_submission(2))

        assert len(calls) > 1
        assert [line["name"] for line in read_lines(log_path)] == ["Person 1", "Person 2"]

    def test_write_without_progress_fails(self, log_path):
        with patch("core.services.submission_log.os.write", return_value=0):
            with pytest.raises(PersistenceError):
                SubmissionLog(log_path).append(make_submission())
