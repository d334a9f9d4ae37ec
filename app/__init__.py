# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the web application:
# - main.py: App factory, logging, error handlers, router mounting
# - config.py: Environment variable loading and settings
# - auth/: Session cookie dependency and register/login/logout routes
# - routers/: Page and form endpoints organized by feature
# - templates/: Jinja2 views
#
# The app layer is thin - it handles HTTP concerns and delegates
# data access to the core/ package.
# =============================================================================
