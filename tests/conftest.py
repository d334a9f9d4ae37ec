# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory user/post stores so route tests never reach Supabase
# - A TestClient wired to an app built with those stores
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.exceptions import DuplicateUserError
from app.main import create_app
from core.context import AppContext
from core.models.post import Post, PostCreate, PostWithAuthor, toggle_like
from core.models.profile import UserProfile
from core.models.session import AuthUser
from core.models.user import User, UserCreate
from core.services.auth_service import AuthService
from core.services.storage_service import StorageService
from lib.utils import normalize_email

TEST_SECRET = "test-jwt-secret"
PUBLIC_IMAGE_URL = "https://test-project.supabase.co/storage/v1/object/public/profile-images/"


# =============================================================================
# In-memory stores
# =============================================================================
# Same public methods as UserStore / PostStore, backed by dicts.

class InMemoryUserStore:
    """Dict-backed stand-in for UserStore."""

    def __init__(self, db: dict):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        email = normalize_email(email)
        for row in self.db["users"].values():
            if row["email"] == email:
                return User.model_validate(row)
        return None

    def get_by_id(self, user_id) -> User | None:
        row = self.db["users"].get(str(user_id))
        return User.model_validate(row) if row else None

    def get_profile(self, email: str) -> UserProfile | None:
        user = self.find_by_email(email)
        if user is None:
            return None
        posts = [
            Post.model_validate(self.db["posts"][str(post_id)])
            for post_id in user.posts
            if str(post_id) in self.db["posts"]
        ]
        return UserProfile(**user.to_public().model_dump(), post_items=posts)

    def create(self, data: UserCreate) -> User:
        if self.find_by_email(data.email):
            raise DuplicateUserError(data.email)
        row = {
            **data.model_dump(),
            "id": str(uuid4()),
            "email": normalize_email(data.email),
            "posts": [],
            "profile_image": None,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.db["users"][row["id"]] = row
        return User.model_validate(row)

    def set_profile_image(self, user_id, filename: str) -> User:
        row = self.db["users"][str(user_id)]
        row["profile_image"] = filename
        return User.model_validate(row)

    def append_post(self, user_id, post_id) -> User:
        row = self.db["users"][str(user_id)]
        row["posts"] = [*row["posts"], str(post_id)]
        return User.model_validate(row)


class InMemoryPostStore:
    """Dict-backed stand-in for PostStore."""

    def __init__(self, db: dict):
        self.db = db

    def create(self, data: PostCreate) -> Post:
        row = {
            "id": str(uuid4()),
            "user_id": str(data.user_id),
            "content": data.content,
            "likes": [],
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.db["posts"][row["id"]] = row
        return Post.model_validate(row)

    def get(self, post_id) -> Post | None:
        row = self.db["posts"].get(str(post_id))
        return Post.model_validate(row) if row else None

    def get_with_author(self, post_id) -> PostWithAuthor | None:
        row = self.db["posts"].get(str(post_id))
        if row is None:
            return None
        author = self.db["users"].get(row["user_id"])
        return PostWithAuthor(
            **Post.model_validate(row).model_dump(),
            author=User.model_validate(author).to_public() if author else None,
        )

    def update_content(self, post_id, content: str) -> Post | None:
        row = self.db["posts"].get(str(post_id))
        if row is None:
            return None
        row["content"] = content
        return Post.model_validate(row)

    def toggle_like(self, post_id, user_id: UUID) -> Post | None:
        post = self.get(post_id)
        if post is None:
            return None
        self.db["posts"][str(post_id)]["likes"] = [
            str(liker) for liker in toggle_like(post.likes, user_id)
        ]
        return self.get(post_id)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
        JWT_SECRET=TEST_SECRET,
        HASH_ROUNDS=4,
    )


@pytest.fixture
def auth_service() -> AuthService:
    """AuthService with the cheapest bcrypt cost to keep tests fast."""
    return AuthService(secret=TEST_SECRET, expiry=timedelta(hours=1), hash_rounds=4)


@pytest.fixture
def db() -> dict:
    """Shared backing dict for the in-memory stores."""
    return {"users": {}, "posts": {}}


@pytest.fixture
def storage_client() -> MagicMock:
    """Mocked Supabase client for profile image storage."""
    client = MagicMock()
    bucket = client.storage.from_.return_value
    bucket.get_public_url.side_effect = lambda name: PUBLIC_IMAGE_URL + name
    return client


@pytest.fixture
def context(test_settings, auth_service, db, storage_client) -> AppContext:
    """AppContext backed by in-memory stores and a mocked storage client."""
    return AppContext(
        settings=test_settings,
        users=InMemoryUserStore(db),
        posts=InMemoryPostStore(db),
        auth=auth_service,
        storage=StorageService(
            bucket=test_settings.PROFILE_IMAGE_BUCKET,
            allowed_extensions=test_settings.allowed_extensions_list,
            max_size_bytes=test_settings.max_upload_size_bytes,
            client=storage_client,
        ),
    )


@pytest.fixture
def client(context) -> TestClient:
    """TestClient that does not follow redirects, so they can be asserted."""
    return TestClient(create_app(context), follow_redirects=False)


@pytest.fixture
def registration_form() -> dict:
    return {
        "username": "alice",
        "name": "Alice Liddell",
        "email": "alice@example.com",
        "age": "28",
        "password": "wonderland",
    }


@pytest.fixture
def logged_in_client(client, registration_form) -> TestClient:
    """A client that registered and holds a session cookie."""
    response = client.post("/register", data=registration_form)
    assert response.status_code == 303
    return client


@pytest.fixture
def current_user(logged_in_client, context, registration_form) -> User:
    return context.users.find_by_email(registration_form["email"])


@pytest.fixture
def other_user(context) -> User:
    """A second registered user (not logged in)."""
    return context.users.create(
        UserCreate(
            username="bob",
            email="bob@example.com",
            password=context.auth.hash_password("builder"),
        )
    )


def token_for(context: AppContext, user: User) -> str:
    return context.auth.issue_token(AuthUser(id=user.id, email=user.email))
