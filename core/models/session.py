# =============================================================================
# core/models/session.py - Session Token Schemas
# =============================================================================
# - AuthUser: The identity carried by a valid session token
# - TokenPayload: The decoded JWT claims
#
# Sessions are stateless: nothing here is ever written to the datastore.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Identity extracted from a session token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str


class TokenPayload(BaseModel):
    """
    Decoded session token claims.

    Claim names match the cookie format issued at login: `userId` rather
    than the registered `sub` claim.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., min_length=1)
    user_id: UUID = Field(..., alias="userId")
    exp: int  # Expiration timestamp
    iat: int | None = None  # Issued at timestamp

    def to_identity(self) -> AuthUser:
        return AuthUser(id=self.user_id, email=self.email)
