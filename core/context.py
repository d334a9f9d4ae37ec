# =============================================================================
# core/context.py - Application Context
# =============================================================================
# The stores and services a request handler may use, built once at startup
# and handed to handlers through a FastAPI dependency. Tests build their own
# context with in-memory stores and pass it to create_app().
# =============================================================================

from dataclasses import dataclass

from app.config import Settings
from core.services.auth_service import AuthService
from core.services.post_store import PostStore
from core.services.storage_service import StorageService
from core.services.user_store import UserStore


@dataclass
class AppContext:
    """Everything a route handler depends on."""

    settings: Settings
    users: UserStore
    posts: PostStore
    auth: AuthService
    storage: StorageService


def build_context(settings: Settings) -> AppContext:
    """
    Wire the production context.

    The Supabase client is not created here; the stores resolve it on
    their first query.
    """
    return AppContext(
        settings=settings,
        users=UserStore(),
        posts=PostStore(),
        auth=AuthService(
            secret=settings.JWT_SECRET,
            expiry=settings.JWT_EXPIRY,
            hash_rounds=settings.HASH_ROUNDS,
            algorithm=settings.JWT_ALGORITHM,
        ),
        storage=StorageService(
            bucket=settings.PROFILE_IMAGE_BUCKET,
            allowed_extensions=settings.allowed_extensions_list,
            max_size_bytes=settings.max_upload_size_bytes,
        ),
    )
