# =============================================================================
# core/models/profile.py - Profile View Schema
# =============================================================================
# UserProfile is what the profile page renders: the public user plus its
# post references resolved to full posts, in posting order.
# =============================================================================

from pydantic import Field

from .post import Post
from .user import UserPublic


class UserProfile(UserPublic):
    """A user with its post references resolved."""

    post_items: list[Post] = Field(
        default_factory=list,
        description="The user's posts, resolved from `posts`"
    )

    @property
    def total_likes(self) -> int:
        return sum(post.like_count for post in self.post_items)
