# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Builds an isolated app per test: static root and submission log live
#   under tmp_path
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

FORM_HTML = "<!DOCTYPE html><html><body><form></form></body></html>"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def static_root(tmp_path):
    """
    A static root with a default document, a stylesheet and a subdirectory.

    A file that must never be served sits next to (outside) the root.
    """
    root = tmp_path / "static"
    root.mkdir()
    (root / "form.html").write_text(FORM_HTML, encoding="utf-8")
    (root / "style.css").write_text("body { color: black; }", encoding="utf-8")
    (root / "sub").mkdir()
    (root / "sub" / "page.html").write_text("<p>sub</p>", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("top secret", encoding="utf-8")
    return root


@pytest.fixture
def log_path(tmp_path):
    """Location of the submission log (not created yet)."""
    return tmp_path / "form_submissions.txt"


@pytest.fixture
def settings(static_root, log_path):
    """Settings pointing at the temporary static root and log."""
    return Settings(STATIC_ROOT=static_root, SUBMISSION_LOG_PATH=log_path)


@pytest.fixture
def client(settings):
    """Test client for an app built from the temporary settings."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def valid_payload():
    """A submission that passes every rule."""
    return {
        "name": "Ann",
        "email": "ann@example.com",
        "message": "hi",
    }
