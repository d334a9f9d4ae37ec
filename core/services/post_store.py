# =============================================================================
# core/services/post_store.py - Post Store
# =============================================================================
# Persists posts in the `posts` table and applies like toggles.
#
# Table layout:
#   posts(id uuid pk, user_id uuid references users(id), content text,
#         likes jsonb default '[]', created_at timestamptz)
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from supabase import Client

from app.exceptions import StoreFailureError
from core.models.post import Post, PostCreate, PostWithAuthor, toggle_like
from core.models.user import UserPublic
from lib.supabase_client import SupabaseClient, is_no_rows_error
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

POSTS_TABLE = "posts"
USERS_TABLE = "users"

# Everything but the password hash
PUBLIC_USER_COLUMNS = "id, username, name, email, age, profile_image, posts, created_at"


class PostStore:
    """
    Store for posts.

    Every method is a single request against the datastore, except
    toggle_like which reads the likes list and writes it back.
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = SupabaseClient.get_client()
        return self._client

    def create(self, data: PostCreate) -> Post:
        """
        Insert a new post with no likes.

        Raises:
            StoreFailureError: If the insert fails
        """
        row = {
            "user_id": str(data.user_id),
            "content": data.content,
            "likes": [],
        }

        try:
            response = self.client.table(POSTS_TABLE).insert(row).execute()
        except Exception as e:
            logger.error(f"Failed to create post: {e}")
            raise StoreFailureError("create post", str(e))

        if not response.data:
            raise StoreFailureError("create post", "insert returned no data")

        post = Post.model_validate(response.data[0])
        logger.info(f"Created post {post.id} for user {post.user_id}")
        return post

    def get(self, post_id: UUID | str) -> Post | None:
        """Fetch a post by ID, or None if it doesn't exist."""
        row = self._fetch_row(POSTS_TABLE, "*", post_id, "get post")
        return Post.model_validate(row) if row else None

    def get_with_author(self, post_id: UUID | str) -> PostWithAuthor | None:
        """Fetch a post with its owner resolved (without the password hash)."""
        row = self._fetch_row(POSTS_TABLE, "*", post_id, "get post")
        if not row:
            return None

        author = self._fetch_row(USERS_TABLE, PUBLIC_USER_COLUMNS, row["user_id"], "get post author")
        return PostWithAuthor(
            **Post.model_validate(row).model_dump(),
            author=UserPublic.model_validate(author) if author else None,
        )

    def update_content(self, post_id: UUID | str, content: str) -> Post | None:
        """
        Replace a post's content. Author and likes are left untouched.

        Returns:
            The updated post, or None if no post has this ID
        """
        return self._update(post_id, {"content": content}, "update post")

    def toggle_like(self, post_id: UUID | str, user_id: UUID) -> Post | None:
        """
        Flip user_id's membership in the post's likes.

        Concurrent toggles on the same post are last-write-wins.

        Returns:
            The updated post, or None if no post has this ID
        """
        post = self.get(post_id)
        if post is None:
            return None

        likes = toggle_like(post.likes, user_id)
        updated = self._update(post_id, {"likes": [str(liker) for liker in likes]}, "toggle like")

        liked = user_id in likes
        logger.info(f"User {user_id} {'liked' if liked else 'unliked'} post {post.id}")
        return updated

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _fetch_row(
        self,
        table: str,
        columns: str,
        row_id: UUID | str,
        operation: str,
    ) -> dict[str, Any] | None:
        row_id_str = normalize_uuid(row_id)

        try:
            response = (
                self.client.table(table)
                .select(columns)
                .eq("id", row_id_str)
                .single()
                .execute()
            )
        except Exception as e:
            if is_no_rows_error(e):
                return None
            logger.error(f"Failed to {operation} {row_id_str}: {e}")
            raise StoreFailureError(operation, str(e))

        return response.data

    def _update(self, post_id: UUID | str, changes: dict[str, Any], operation: str) -> Post | None:
        post_id_str = normalize_uuid(post_id)

        try:
            response = (
                self.client.table(POSTS_TABLE)
                .update(changes)
                .eq("id", post_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to {operation} {post_id_str}: {e}")
            raise StoreFailureError(operation, str(e))

        if not response.data:
            return None
        return Post.model_validate(response.data[0])
