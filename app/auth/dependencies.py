# =============================================================================
# app/auth/dependencies.py - Session Cookie Dependency
# =============================================================================
# Guards every route that needs an identity.
#
#   no cookie      -> redirect to /login (store never touched)
#   invalid token  -> clear cookie, redirect to /login
#   valid token    -> AuthenticatedRequest
#
# Usage:
#   from app.auth import SessionDep
#
#   @router.get("/profile")
#   async def profile(session: SessionDep):
#       return {"user_id": session.identity.id}
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends, Request

from app.auth.models import AuthenticatedRequest
from app.dependencies import ContextDep
from app.exceptions import InvalidTokenError, LoginRequired

logger = logging.getLogger(__name__)


async def get_authenticated_request(
    request: Request,
    context: ContextDep,
) -> AuthenticatedRequest:
    """
    Validate the session cookie and attach the identity to the request.

    Never produces an error response: any failure raises LoginRequired,
    which is answered with a redirect to the login page.
    """
    token = request.cookies.get(context.settings.COOKIE_NAME)

    if not token:
        logger.debug(f"No session cookie on {request.url.path}, redirecting to login")
        raise LoginRequired()

    try:
        identity = context.auth.validate_token(token)
    except InvalidTokenError as e:
        logger.warning(f"Rejected session token on {request.url.path}: {e.message}")
        raise LoginRequired(clear_cookie=True)

    request.state.identity = identity
    return AuthenticatedRequest(request=request, identity=identity, context=context)


# Type alias for dependency injection
SessionDep = Annotated[AuthenticatedRequest, Depends(get_authenticated_request)]
