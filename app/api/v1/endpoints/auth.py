"""
Authentication endpoints
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.security import hash_password, verify_password, create_access_token
from app.core.exceptions import AuthenticationError, DuplicateResourceError
from app.core.deps import get_current_user
from app.models.user import User
from app.schemas.auth import UserRegister, UserLogin, AuthResponse
from app.schemas.user import UserSummary

router = APIRouter()
logger = logging.getLogger(__name__)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        token=create_access_token({"sub": str(user.id)})
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user"""
    email = user_data.email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise DuplicateResourceError("User")

    user = User(
        name=user_data.name,
        email=email,
        password_hash=hash_password(user_data.password)
    )
    db.add(user)
    await db.commit()

    logger.info("User registered", extra={"user_id": str(user.id)})
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    user_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Authenticate a user and issue an access token"""
    result = await db.execute(select(User).where(User.email == user_data.email.lower()))
    user = result.scalar_one_or_none()

    # Same message for unknown email and wrong password
    if not user or not verify_password(user_data.password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    logger.info("User logged in", extra={"user_id": str(user.id)})
    return _auth_response(user)


@router.get("/me", response_model=UserSummary)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return UserSummary.from_user(current_user)
