"""
Shared infrastructure for GameHub backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base repository and query helpers
- models: Authenticated user, roles and pagination

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import init_supabase_client, get_supabase_client, reset_client_cache
from .exceptions import (
    GameHubError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    DuplicateRecordError,
)
from .models import AuthenticatedUser, PaginationMeta, Role

__all__ = [
    "Settings",
    "get_settings",
    "init_supabase_client",
    "get_supabase_client",
    "reset_client_cache",
    "GameHubError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "DuplicateRecordError",
    "AuthenticatedUser",
    "PaginationMeta",
    "Role",
]
