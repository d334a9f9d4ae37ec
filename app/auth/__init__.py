# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Cookie-based sessions: a signed JWT in the HTTP-only `token` cookie.
#
# Usage:
#   from app.auth import SessionDep
#
#   @router.get("/protected")
#   async def protected(session: SessionDep):
#       return {"user_id": session.identity.id}
# =============================================================================

from app.auth.dependencies import SessionDep, get_authenticated_request
from app.auth.models import AuthenticatedRequest

__all__ = [
    "SessionDep",
    "get_authenticated_request",
    "AuthenticatedRequest",
]
