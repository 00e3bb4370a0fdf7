"""
Authentication API routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database import get_db
from storefront.models import User
from .dependencies import get_current_user
from .schemas import (
    RegisterRequest,
    LoginRequest,
    AuthResponse,
    UserResponse
)
from .services import AuthService

router = APIRouter()

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a customer account with email and password"
)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Register new user"""
    service = AuthService(db)
    user = await service.register(request)
    tokens = service.generate_tokens(user)

    return AuthResponse(
        user=UserResponse.model_validate(user),
        tokens=tokens
    )

@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Login with email and password"
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Login user"""
    service = AuthService(db)
    user = await service.login(request.email, request.password)
    tokens = service.generate_tokens(user)

    return AuthResponse(
        user=UserResponse.model_validate(user),
        tokens=tokens
    )

@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user"
)
async def me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return current_user
