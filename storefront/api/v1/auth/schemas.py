"""
Authentication schemas for request/response validation
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
import uuid

from storefront.core.config import settings
from storefront.models.user import UserRole

class RegisterRequest(BaseModel):
    """User registration request"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., max_length=128)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Jane Doe",
                "email": "jane@example.com",
                "password": "secret123"
            }
        }
    }

class LoginRequest(BaseModel):
    """Email/password login request"""
    email: EmailStr
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower()

class TokenResponse(BaseModel):
    """JWT token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiry in seconds")

    model_config = {
        "json_schema_extra": {
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 3600
            }
        }
    }

class UserResponse(BaseModel):
    """User information response"""
    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    created_at: datetime

    model_config = {
        "from_attributes": True
    }

class AuthResponse(BaseModel):
    """Authentication response with token and user info"""
    user: UserResponse
    tokens: TokenResponse
