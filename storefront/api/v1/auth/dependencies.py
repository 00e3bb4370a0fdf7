"""
Authentication dependencies
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import uuid

from storefront.core.database import get_db
from storefront.core.security import SecurityUtils
from storefront.core.exceptions import UnauthorizedException, ForbiddenException
from storefront.models import User

# Missing credentials are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user (required)
    Raises 401 if not authenticated or user not found
    """
    if not credentials:
        raise UnauthorizedException("Not authenticated")

    payload = SecurityUtils.decode_token(credentials.credentials)

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise UnauthorizedException("Invalid authentication credentials")

    result = await db.execute(
        select(User).where(User.id == user_id, User.is_active == True)
    )
    user = result.scalar_one_or_none()

    if user is None:
        raise UnauthorizedException("User not found or inactive")

    return user

async def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current user and ensure they have admin privileges
    """
    if not current_user.is_admin:
        raise ForbiddenException("Admin privileges required")

    return current_user
