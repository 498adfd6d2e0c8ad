# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the HTTP layer of the form server:
# - main.py: App factory, logging setup, middleware and router wiring
# - config.py: Environment variable loading and settings
# - exceptions.py: Error taxonomy and plain-text error handlers
# - middleware.py: Security headers applied to every response
# - dependencies.py: Depends() aliases for per-process services
# - routers/: The submit and static file endpoints
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
