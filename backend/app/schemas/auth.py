"""Pydantic schemas for authentication"""

from pydantic import EmailStr, Field, field_validator

from backend.app.models.user import UserRole
from backend.app.schemas.common import CamelModel
from backend.app.schemas.user import UserResponse


class UserCreate(CamelModel):
    """Schema for user registration"""
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.FREELANCER
    
    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()
    
    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v == UserRole.ADMIN:
            raise ValueError('Role must be client or freelancer')
        return v


class UserLogin(CamelModel):
    """Schema for user login"""
    email: EmailStr
    password: str


class TokenRefresh(CamelModel):
    """Schema for token refresh request"""
    refresh_token: str


class TokenResponse(CamelModel):
    """Tokens plus the identity they were issued for"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse
