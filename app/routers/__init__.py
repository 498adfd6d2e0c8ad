# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers, one per route variant:
# - submit.py: POST /submit form submission pipeline
# - static.py: GET catch-all serving files from the static root
#
# Anything neither router matches is answered 404 by the handlers in
# app/exceptions.py. The submit router must be mounted before the static
# catch-all.
# =============================================================================

from . import static
from . import submit

__all__ = [
    "static",
    "submit",
]
