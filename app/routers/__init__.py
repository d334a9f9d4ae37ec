# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - profile.py: Profile page and profile picture upload
# - posts.py: Create, edit and like posts
#
# Registration/login/logout live in app/auth/routes.py.
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import posts
from . import profile

__all__ = [
    "health",
    "posts",
    "profile",
]
