"""
Authentication Schemas
Identity of the caller as resolved from the bearer token.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """Supabase user behind the current request."""

    id: UUID = Field(..., description="Supabase auth user id")
    email: Optional[str] = Field(None, description="User email, when known")
