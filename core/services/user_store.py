# =============================================================================
# core/services/user_store.py - Credential Store
# =============================================================================
# Persists user records in the `users` table.
# Separates HTTP concerns from database access: routes never build queries.
#
# Table layout:
#   users(id uuid pk, username text, name text, email text unique,
#         age int, password text, profile_image text,
#         posts jsonb default '[]', created_at timestamptz)
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from supabase import Client

from app.exceptions import DuplicateUserError, StoreFailureError
from core.models.post import Post
from core.models.profile import UserProfile
from core.models.user import User, UserCreate
from lib.supabase_client import SupabaseClient, is_no_rows_error, is_unique_violation
from lib.utils import normalize_email, normalize_uuid

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
POSTS_TABLE = "posts"


class UserStore:
    """
    Store for user records.

    Takes the Supabase client explicitly; when none is given the shared
    singleton is resolved on first query.
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = SupabaseClient.get_client()
        return self._client

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_email(self, email: str) -> User | None:
        """
        Look up a user by email.

        Returns:
            The stored user, or None if no account uses this email

        Raises:
            StoreFailureError: If the query fails
        """
        email = normalize_email(email)

        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("*")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch user by email: {e}")
            raise StoreFailureError("find user by email", str(e))

        rows = response.data or []
        return User.model_validate(rows[0]) if rows else None

    def get_by_id(self, user_id: UUID | str) -> User | None:
        """Fetch a user by ID, or None if it doesn't exist."""
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("*")
                .eq("id", user_id_str)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                return None
            logger.error(f"Failed to fetch user {user_id_str}: {e}")
            raise StoreFailureError("get user", str(e))

        return User.model_validate(response.data) if response.data else None

    def get_profile(self, email: str) -> UserProfile | None:
        """
        Fetch a user with its post references resolved.

        Posts come back in the order of the user's `posts` list; references
        to posts that no longer exist are skipped.
        """
        user = self.find_by_email(email)
        if user is None:
            return None

        post_ids = [str(post_id) for post_id in user.posts]
        posts_by_id: dict[str, dict[str, Any]] = {}

        if post_ids:
            try:
                response = (
                    self.client.table(POSTS_TABLE)
                    .select("*")
                    .in_("id", post_ids)
                    .execute()
                )
            except Exception as e:
                logger.error(f"Failed to resolve posts for user {user.id}: {e}")
                raise StoreFailureError("resolve user posts", str(e))

            posts_by_id = {str(row["id"]): row for row in response.data or []}

        post_items = [
            Post.model_validate(posts_by_id[post_id])
            for post_id in post_ids
            if post_id in posts_by_id
        ]

        return UserProfile(**user.to_public().model_dump(), post_items=post_items)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: UserCreate) -> User:
        """
        Insert a new user.

        Raises:
            DuplicateUserError: If the email is already registered
            StoreFailureError: If the insert fails for any other reason
        """
        row = data.model_dump()
        row["email"] = normalize_email(row["email"])
        row["posts"] = []

        try:
            response = self.client.table(USERS_TABLE).insert(row).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise DuplicateUserError(row["email"])
            logger.error(f"Failed to create user: {e}")
            raise StoreFailureError("create user", str(e))

        if not response.data:
            raise StoreFailureError("create user", "insert returned no data")

        user = User.model_validate(response.data[0])
        logger.info(f"Created user: {user.id}")
        return user

    def set_profile_image(self, user_id: UUID | str, filename: str) -> User:
        """Store the profile picture filename on a user."""
        return self._update(user_id, {"profile_image": filename}, "set profile image")

    def append_post(self, user_id: UUID | str, post_id: UUID | str) -> User:
        """
        Append a post reference to the user's `posts` list.

        Read-modify-write; two posts created at the same instant by the
        same user may lose a reference.
        """
        user = self.get_by_id(user_id)
        if user is None:
            raise StoreFailureError("append post", f"user {normalize_uuid(user_id)} not found")

        posts = [str(existing) for existing in user.posts]
        posts.append(normalize_uuid(post_id))
        return self._update(user_id, {"posts": posts}, "append post")

    def _update(self, user_id: UUID | str, changes: dict[str, Any], operation: str) -> User:
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                self.client.table(USERS_TABLE)
                .update(changes)
                .eq("id", user_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to {operation} for user {user_id_str}: {e}")
            raise StoreFailureError(operation, str(e))

        if not response.data:
            raise StoreFailureError(operation, f"user {user_id_str} not found")

        logger.info(f"Updated user {user_id_str}: {', '.join(changes)}")
        return User.model_validate(response.data[0])
