# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for Socialboard:
# - test_config.py: Settings and duration parsing
# - test_models.py: Pydantic model validation and the like toggle
# - test_auth_service.py: Password hashing and session tokens
# - test_stores.py: User/post stores and image storage with a mocked client
# - test_session.py: Session cookie dependency (redirects, cookie clearing)
# - test_auth_routes.py: Register, login, logout
# - test_post_routes.py: Create, edit, update and like posts
# - test_profile_routes.py: Profile pages and picture upload
# - test_health.py: Liveness and readiness endpoints
#
# Run tests with: pytest
# =============================================================================
