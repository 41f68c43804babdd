"""
Authentication Package
Resolves the calling Supabase user and provides rate limiting.
"""

from app.auth.dependencies import CurrentUser, get_current_user, resolve_supabase_user
from app.auth.rate_limit import limiter
from app.auth.schemas import AuthenticatedUser

__all__ = [
    "AuthenticatedUser",
    "CurrentUser",
    "get_current_user",
    "limiter",
    "resolve_supabase_user",
]
