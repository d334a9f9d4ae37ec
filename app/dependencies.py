# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from core.context import AppContext

# Server-rendered views live next to this package
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")


def get_app_context(request: Request) -> AppContext:
    """
    Get the AppContext the application was created with.

    Set by create_app() on app.state.
    """
    return request.app.state.context


# Type alias for dependency injection
ContextDep = Annotated[AppContext, Depends(get_app_context)]
