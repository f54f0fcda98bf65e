"""
Shared infrastructure for Colloquy backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Root logger setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, is_supabase_configured, reset_client_cache
from .exceptions import (
    ColloquyError,
    NotFoundError,
    ValidationError,
)
from .logging_config import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "is_supabase_configured",
    "reset_client_cache",
    "ColloquyError",
    "NotFoundError",
    "ValidationError",
    "configure_logging",
]
