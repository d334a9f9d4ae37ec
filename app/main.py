# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Socialboard web app.
# It configures the FastAPI application with handlers and routers.
#
# Usage:
#   uvicorn app.main:app --reload
#   socialboard            (console script, see run())
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.exceptions import (
    GENERIC_ERROR_MESSAGE,
    LoginRequired,
    SocialboardException,
    login_required_handler,
    socialboard_exception_handler,
    validation_exception_handler,
)
from app.auth import routes as auth_routes
from app.routers import health, posts, profile
from core.context import AppContext, build_context

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Nothing to open or close: the Supabase client is created on first use.
    """
    context: AppContext = app.state.context
    logger.info(f"Starting Socialboard in {context.settings.ENVIRONMENT} mode")
    if not context.settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set: registration and login will fail")

    yield

    logger.info("Shutting down Socialboard")


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Stores and services for the handlers. Defaults to the
            Supabase-backed context built from the global settings.
    """
    app = FastAPI(
        title="Socialboard",
        description="Server-rendered social app: profiles, posts and likes.",
        version=health.VERSION,
        lifespan=lifespan,
    )
    app.state.context = context or build_context(settings)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(SocialboardException, socialboard_exception_handler)
    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return PlainTextResponse(GENERIC_ERROR_MESSAGE, status_code=500)

    # =========================================================================
    # Routers
    # =========================================================================

    # Landing page, register, login, logout
    app.include_router(auth_routes.router, tags=["Auth"])

    # Profile page and picture upload
    app.include_router(profile.router, tags=["Profile"])

    # Create, edit and like posts
    app.include_router(posts.router, tags=["Posts"])

    # Health check endpoints
    app.include_router(health.router, tags=["Health"])

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    logger.info(f"Server running at http://localhost:{settings.PORT}")
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
        reload=settings.DEBUG and settings.is_development,
    )


if __name__ == "__main__":
    run()
