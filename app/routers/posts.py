# =============================================================================
# app/routers/posts.py - Post Endpoints
# =============================================================================
# Create, edit and like posts. Everything except the create form requires
# a session cookie.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Form, Path, Request, status
from fastapi.responses import RedirectResponse

from app.auth import SessionDep
from app.dependencies import templates
from app.exceptions import PostNotFoundError, StoreFailureError
from core.models.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _back_to_profile(status_code: int = status.HTTP_303_SEE_OTHER) -> RedirectResponse:
    return RedirectResponse(url="/profile", status_code=status_code)


# =============================================================================
# Pages
# =============================================================================

@router.get("/createPost")
async def create_post_page(request: Request):
    """Form for writing a new post."""
    return templates.TemplateResponse(request, "create.html")


@router.get("/edit/{post_id}")
async def edit_post_page(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    session: SessionDep,
):
    """Edit form for a post, with its author resolved."""
    post = session.context.posts.get_with_author(post_id)
    if post is None:
        raise PostNotFoundError(str(post_id))

    return templates.TemplateResponse(session.request, "edit.html", {"post": post})


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/post")
async def create_post(
    form: Annotated[PostUpdate, Form()],
    session: SessionDep,
):
    """Create a post owned by the current user and link it to their profile."""
    context = session.context
    user = session.current_user()

    post = context.posts.create(PostCreate(user_id=user.id, content=form.content))
    try:
        context.users.append_post(user.id, post.id)
    except StoreFailureError:
        # The post row exists but is not listed on the profile
        logger.error(f"Post {post.id} created but not linked to user {user.id}")
        raise

    return _back_to_profile()


@router.post("/update/{post_id}")
async def update_post(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    form: Annotated[PostUpdate, Form()],
    session: SessionDep,
):
    """Replace a post's content. Author and likes are unchanged."""
    post = session.context.posts.update_content(post_id, form.content)
    if post is None:
        raise PostNotFoundError(str(post_id))

    logger.info(f"Post {post_id} edited by {session.identity.id}")
    return _back_to_profile()


@router.get("/like/{post_id}")
async def toggle_like(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    session: SessionDep,
):
    """Like the post, or unlike it if the current user already does."""
    post = session.context.posts.toggle_like(post_id, session.identity.id)
    if post is None:
        raise PostNotFoundError(str(post_id))

    return _back_to_profile(status.HTTP_302_FOUND)
