"""
Dependency injection utilities
"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.db_types import parse_uuid
from app.core.exceptions import APIException, AuthenticationError
from app.core.security import verify_token
from app.models.user import User


security = HTTPBearer(auto_error=False)


async def get_user_from_token(token: str, db: AsyncSession) -> User:
    """Resolve a bearer token to its user, shared by HTTP and websocket auth"""
    payload = verify_token(token)
    try:
        user_id = parse_uuid(payload["sub"], "User")
    except APIException:
        raise AuthenticationError("Invalid token subject")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise AuthenticationError("User no longer exists")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user from the bearer token
    """
    if not credentials:
        raise AuthenticationError("Not authorized, no token")
    return await get_user_from_token(credentials.credentials, db)

