# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .post_store import PostStore
from .storage_service import StorageService
from .user_store import UserStore

__all__ = [
    "AuthService",
    "PostStore",
    "StorageService",
    "UserStore",
]
