# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for the form submission
# - validation.py: Ordered field rules for submissions
# - services/: Static file resolution and the submission log
#
# Code in this package should NOT import FastAPI directly; errors are raised
# as app.exceptions types and turned into responses by the app layer.
# =============================================================================
