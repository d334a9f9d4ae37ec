# =============================================================================
# core/services/auth_service.py - Password Hashing and Session Tokens
# =============================================================================
# - Passwords are hashed with bcrypt (random salt, configurable cost)
# - Session tokens are HS256 JWTs signed with JWT_SECRET via python-jose
#
# Usage:
#   auth = AuthService(secret=settings.JWT_SECRET, expiry=settings.JWT_EXPIRY)
#   hashed = auth.hash_password("hunter2")
#   token = auth.issue_token(AuthUser(id=user.id, email=user.email))
#   identity = auth.validate_token(token)
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.exceptions import InvalidTokenError, TokenConfigurationError
from core.models.session import AuthUser, TokenPayload
from core.models.user import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")


class AuthService:
    """
    Hashes/verifies passwords and issues/validates session tokens.

    Holds no state besides its configuration, so one instance is shared
    by every request.
    """

    def __init__(
        self,
        secret: str,
        expiry: timedelta,
        hash_rounds: int = 10,
        algorithm: str = "HS256",
    ):
        self.secret = secret
        self.expiry = expiry
        self.hash_rounds = hash_rounds
        self.algorithm = algorithm

    # -------------------------------------------------------------------------
    # Passwords
    # -------------------------------------------------------------------------

    def hash_password(self, plaintext: str) -> str:
        """
        One-way, salted bcrypt hash of a password.

        Raises ValueError for passwords over MAX_PASSWORD_BYTES, which
        bcrypt would otherwise compare by prefix only.
        """
        password = _password_bytes(plaintext)
        if len(password) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=self.hash_rounds)
        return bcrypt.hashpw(password, salt).decode("utf-8")

    def verify_password(self, plaintext: str, hashed: str) -> bool:
        """
        Check a password against a stored hash.

        Comparison is done by bcrypt itself. A stored value that isn't a
        bcrypt hash never matches, nor does a password too long to have
        been hashed.
        """
        password = _password_bytes(plaintext)
        if len(password) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password, hashed.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password is not a valid bcrypt hash")
            return False

    # -------------------------------------------------------------------------
    # Session Tokens
    # -------------------------------------------------------------------------

    def issue_token(self, identity: AuthUser) -> str:
        """
        Sign a session token for a user.

        Raises:
            TokenConfigurationError: If no signing secret is configured
        """
        if not self.secret:
            raise TokenConfigurationError()

        now = datetime.now(timezone.utc)
        claims = {
            "email": identity.email,
            "userId": str(identity.id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.expiry).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def validate_token(self, token: str) -> AuthUser:
        """
        Verify a session token and return the identity it carries.

        Raises:
            InvalidTokenError: For any malformed, expired or forged token
        """
        if not self.secret:
            raise InvalidTokenError("signing secret not configured")

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
            return TokenPayload.model_validate(claims).to_identity()

        except ExpiredSignatureError:
            raise InvalidTokenError("expired")
        except JWTError as e:
            raise InvalidTokenError(str(e))
        except ValidationError as e:
            raise InvalidTokenError(f"bad claims ({e.error_count()} errors)")
