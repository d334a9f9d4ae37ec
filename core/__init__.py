# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the data layer and services:
# - models/: Pydantic schemas validated at the store boundary
# - services/: User/post stores, image storage, auth (hashing + tokens)
# - context.py: The AppContext handed to route handlers
#
# Routes never talk to Supabase directly; they go through the context.
# =============================================================================
