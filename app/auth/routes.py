# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Registration, login and logout. A successful register/login sets the
# session cookie and redirects to the profile page.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse

from app.dependencies import ContextDep, templates
from app.exceptions import DuplicateUserError, InvalidCredentialsError, UserNotFoundError
from core.context import AppContext
from core.models.session import AuthUser
from core.models.user import LoginForm, User, UserCreate, UserRegistration

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

def _start_session(context: AppContext, user: User) -> RedirectResponse:
    """Issue a token for the user and redirect to the profile with the cookie set."""
    token = context.auth.issue_token(AuthUser(id=user.id, email=user.email))

    response = RedirectResponse(url="/profile", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=context.settings.COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=context.settings.is_production,
    )
    return response


# =============================================================================
# Pages
# =============================================================================

@router.get("/")
async def index(request: Request):
    """Landing page with the registration form."""
    return templates.TemplateResponse(request, "index.html")


@router.get("/login")
async def login_page(request: Request):
    """Login form."""
    return templates.TemplateResponse(request, "login.html")


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/register")
async def register(
    form: Annotated[UserRegistration, Form()],
    context: ContextDep,
):
    """
    Create an account and log the new user in.

    Returns 400 if the email is already registered.
    """
    if context.users.find_by_email(form.email):
        raise DuplicateUserError(form.email)

    user = context.users.create(
        UserCreate(
            username=form.username,
            name=form.name,
            email=form.email,
            age=form.age,
            password=context.auth.hash_password(form.password),
        )
    )

    logger.info(f"Registered user {user.id}")
    return _start_session(context, user)


@router.post("/login")
async def login(
    form: Annotated[LoginForm, Form()],
    context: ContextDep,
):
    """
    Log in with email and password.

    Returns 404 for an unknown email and 401 for a wrong password.
    """
    user = context.users.find_by_email(form.email)
    if user is None:
        raise UserNotFoundError(form.email)

    if not context.auth.verify_password(form.password, user.password):
        logger.warning(f"Failed login for user {user.id}")
        raise InvalidCredentialsError(form.email)

    logger.info(f"User {user.id} logged in")
    return _start_session(context, user)


@router.get("/logout")
async def logout(context: ContextDep):
    """Drop the session cookie and go back to the login page."""
    response = RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)
    response.delete_cookie(context.settings.COOKIE_NAME)
    return response
