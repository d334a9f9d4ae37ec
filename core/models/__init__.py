# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas validated at the store boundary:
# - user.py: Registration/login forms and stored user rows
# - post.py: Post rows, edit input and the like toggle
# - profile.py: User with resolved posts for the profile page
# =============================================================================

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    LoginForm,
    User,
    UserCreate,
    UserPublic,
    UserRegistration,
)

# -----------------------------------------------------------------------------
# Post Models
# -----------------------------------------------------------------------------
from .post import (
    Post,
    PostCreate,
    PostUpdate,
    PostWithAuthor,
    toggle_like,
)

# -----------------------------------------------------------------------------
# Profile Models
# -----------------------------------------------------------------------------
from .profile import UserProfile

__all__ = [
    # User
    "LoginForm",
    "User",
    "UserCreate",
    "UserPublic",
    "UserRegistration",
    # Post
    "Post",
    "PostCreate",
    "PostUpdate",
    "PostWithAuthor",
    "toggle_like",
    # Profile
    "UserProfile",
]
