# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the form server:
# - test_validation.py: Ordered field rules
# - test_models.py: Submission parsing and log record format
# - test_static_service.py: Path resolution and containment
# - test_submission_log.py: Append-only log, permissions, concurrency
# - test_routes.py: GET static serving and unmatched routes
# - test_submit.py: POST /submit pipeline
# - test_security_headers.py: Headers on every response
# - test_config.py: Settings defaults and environment overrides
#
# Run tests with: poetry run pytest
# =============================================================================
