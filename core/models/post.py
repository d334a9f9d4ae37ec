# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# These models define the shape of a post at the store boundary:
# - PostCreate: Input for creating a new post
# - PostUpdate: Input for replacing a post's content
# - Post: A stored post row
# - PostWithAuthor: A post with its owner resolved (edit view)
#
# The likes list is a set of user IDs stored as a JSON array. Duplicates
# are collapsed here so every Post in memory holds each ID at most once.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .user import UserPublic


def toggle_like(likes: list[UUID], user_id: UUID) -> list[UUID]:
    """
    Flip membership of user_id in a likes list.

    Absent -> appended, present -> removed. Applying it twice with the
    same user restores the same membership.

    Example:
        toggle_like([a], b) -> [a, b]
        toggle_like([a, b], a) -> [b]
    """
    if user_id in likes:
        return [liker for liker in likes if liker != user_id]
    return [*likes, user_id]


class PostCreate(BaseModel):
    """
    Schema for creating a new post.

    Example:
        {
            "user_id": "550e8400-e29b-41d4-a716-446655440000",
            "content": "Hello world"
        }
    """

    # Owner of the post
    user_id: UUID = Field(
        ...,
        description="ID of the user who wrote the post"
    )

    content: str = Field(
        ...,
        min_length=1,
        description="Post text"
    )


class PostUpdate(BaseModel):
    """Schema for editing a post. Only the content can change."""

    content: str = Field(
        ...,
        min_length=1,
        description="Replacement post text"
    )


class Post(BaseModel):
    """
    A post as stored in the `posts` table.

    Example:
        {
            "id": "660e8400-...",
            "user_id": "550e8400-...",
            "content": "Hello world",
            "likes": ["770e8400-..."],
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: UUID = Field(
        ...,
        description="Unique post identifier"
    )

    user_id: UUID = Field(
        ...,
        description="ID of the user who wrote the post"
    )

    content: str = Field(
        ...,
        description="Post text"
    )

    # User IDs that liked this post, no repeats
    likes: list[UUID] = Field(
        default_factory=list,
        description="IDs of users who liked the post"
    )

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the post was created"
    )

    @field_validator("likes", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return value or []

    @field_validator("likes")
    @classmethod
    def _unique_likes(cls, value: list[UUID]) -> list[UUID]:
        # dict preserves first-seen order
        return list(dict.fromkeys(value))

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_liked_by(self, user_id: UUID) -> bool:
        return user_id in self.likes


class PostWithAuthor(Post):
    """A post with its owning user resolved, used by the edit view."""

    author: UserPublic | None = Field(
        default=None,
        description="The user who wrote the post"
    )
