# =============================================================================
# app/routers/profile.py - Profile Pages and Picture Upload
# =============================================================================
# All endpoints require a session cookie.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Path, UploadFile, status
from fastapi.responses import RedirectResponse

from app.auth import SessionDep
from app.dependencies import templates
from app.exceptions import LoginRequired, MissingFileError

logger = logging.getLogger(__name__)

router = APIRouter()

# Multipart field carrying the picture
UPLOAD_FIELD = "dp"


@router.get("/profile")
async def profile(session: SessionDep):
    """
    The user's profile with all of their posts.

    Store failures answer 500.
    """
    context = session.context
    user = context.users.get_profile(session.identity.email)
    if user is None:
        raise LoginRequired(clear_cookie=True)

    return templates.TemplateResponse(
        session.request,
        "profile.html",
        {
            "user": user,
            "identity": session.identity,
            "image_url": context.storage.public_url(user.profile_image),
        },
    )


@router.get("/profile/upload")
async def upload_page(session: SessionDep):
    """Form for choosing a new profile picture."""
    return templates.TemplateResponse(session.request, "profile_upload.html")


@router.get("/profile/image/{user_image}")
async def profile_image(
    user_image: Annotated[str, Path(description="Stored picture filename")],
    session: SessionDep,
):
    """Full-size view of the current user's profile picture."""
    user = session.current_user()

    return templates.TemplateResponse(
        session.request,
        "profile_image.html",
        {
            "user": user.to_public(),
            "image_url": session.context.storage.public_url(user.profile_image),
        },
    )


@router.post("/upload")
async def upload_profile_image(
    session: SessionDep,
    dp: Annotated[UploadFile | None, File(description="Profile picture")] = None,
):
    """
    Replace the user's profile picture.

    The image is validated (extension, size), stored under a random name,
    and that name is saved on the user.
    """
    if dp is None or not dp.filename:
        raise MissingFileError(UPLOAD_FIELD)

    user = session.current_user()
    content = await dp.read()

    stored_name = session.context.storage.save_profile_image(
        dp.filename,
        content,
        dp.content_type,
    )
    session.context.users.set_profile_image(user.id, stored_name)
    logger.info(f"User {user.id} changed profile picture to {stored_name}")

    return RedirectResponse(url="/profile", status_code=status.HTTP_303_SEE_OTHER)
