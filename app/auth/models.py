# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# AuthenticatedRequest is the only way a handler gets an identity: it is
# produced by the session dependency after the cookie token validated.
# =============================================================================

from dataclasses import dataclass

from fastapi import Request

from app.exceptions import LoginRequired
from core.context import AppContext
from core.models.session import AuthUser
from core.models.user import User


@dataclass(frozen=True)
class AuthenticatedRequest:
    """A request whose session token has been validated."""

    request: Request
    identity: AuthUser
    context: AppContext

    def current_user(self) -> User:
        """
        Load the user the token belongs to.

        A token for an account that no longer exists is treated like an
        invalid token.
        """
        user = self.context.users.find_by_email(self.identity.email)
        if user is None:
            raise LoginRequired(clear_cookie=True)
        return user
