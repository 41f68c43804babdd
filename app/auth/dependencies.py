"""
Authentication Dependencies
FastAPI dependencies for route protection.
"""

import asyncio
import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.schemas import AuthenticatedUser
from app.auth.supabase_client import get_supabase_client

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields 401 instead of 403
security = HTTPBearer(auto_error=False)


async def resolve_supabase_user(token: str) -> Optional[AuthenticatedUser]:
    """
    Look up the Supabase user that owns an access token.

    The Supabase client is synchronous, so the lookup runs in the
    default executor.

    Returns:
        AuthenticatedUser, or None if the token is rejected
    """
    client = get_supabase_client()
    loop = asyncio.get_running_loop()

    try:
        response = await loop.run_in_executor(None, client.auth.get_user, token)
    except Exception as e:
        logger.info("Supabase rejected bearer token: %s", e)
        return None

    user = getattr(response, "user", None)
    if not user or not getattr(user, "id", None):
        return None

    try:
        user_id = UUID(str(user.id))
    except ValueError:
        logger.warning("Supabase returned a non-UUID user id: %r", user.id)
        return None

    return AuthenticatedUser(id=user_id, email=getattr(user, "email", None))


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> AuthenticatedUser:
    """
    Dependency that validates the Supabase bearer token and returns the caller.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        raise unauthorized

    user = await resolve_supabase_user(credentials.credentials)
    if user is None:
        raise unauthorized

    return user


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
