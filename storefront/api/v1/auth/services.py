"""
Authentication service layer
Handles business logic for authentication
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
import logging

from storefront.models import User, UserRole
from storefront.core.security import SecurityUtils
from storefront.core.config import settings
from storefront.core.exceptions import (
    UnauthorizedException,
    DuplicateResourceException
)
from .schemas import RegisterRequest, TokenResponse

logger = logging.getLogger(__name__)

class AuthService:
    """Authentication service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, request: RegisterRequest) -> User:
        """
        Register new user

        Args:
            request: Registration request data

        Returns:
            Created user

        Raises:
            DuplicateResourceException: If email already exists
        """
        existing = await self.db.execute(
            select(User).where(User.email == request.email)
        )
        if existing.scalar_one_or_none():
            raise DuplicateResourceException("User", "email", request.email)

        admin_emails = {email.lower() for email in settings.ADMIN_EMAILS}
        role = UserRole.ADMIN if request.email in admin_emails else UserRole.CUSTOMER

        user = User(
            name=request.name,
            email=request.email,
            password_hash=SecurityUtils.hash_password(request.password),
            role=role
        )

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Registered user {user.id} with role {role.value}")
        return user

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate user by email and password

        Raises:
            UnauthorizedException: If credentials are wrong or the account is inactive
        """
        result = await self.db.execute(
            select(User).where(
                and_(User.email == email, User.is_active == True)
            )
        )
        user = result.scalar_one_or_none()

        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise UnauthorizedException("Invalid email or password", error_code="INVALID_CREDENTIALS")

        return user

    def generate_tokens(self, user: User) -> TokenResponse:
        """
        Generate access token for user

        Args:
            user: User object

        Returns:
            TokenResponse with the bearer token
        """
        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value
        }

        access_token = SecurityUtils.create_access_token(token_data)

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )
