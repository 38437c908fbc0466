"""User schemas shared by the auth and admin APIs"""

from typing import List, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field, field_validator

from backend.app.models.user import UserRole
from backend.app.schemas.common import CamelModel, PaginationMeta


class Profile(CamelModel):
    """Freelancer profile"""
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    hourly_rate: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    
    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        # Skills form a set: trimmed, non-empty, first occurrence wins
        seen = []
        for skill in v:
            skill = skill.strip()
            if skill and skill not in seen:
                seen.append(skill)
        return seen


class UserSummary(CamelModel):
    """Identity of a job's client"""
    id: UUID
    name: str
    email: Optional[str] = None


class ApplicantSummary(CamelModel):
    """Identity and profile of an applicant"""
    id: UUID
    name: str
    profile: Profile


class UserResponse(CamelModel):
    """Full user record, never including the password hash"""
    id: UUID
    name: str
    email: str
    role: UserRole
    is_verified: bool
    profile: Profile
    created_at: datetime


class UserListResponse(CamelModel):
    """Paginated users"""
    items: List[UserResponse]
    pagination: PaginationMeta


class AdminUserUpdateRequest(CamelModel):
    """Partial moderation update; omitted fields stay unchanged"""
    role: Optional[UserRole] = None
    is_verified: Optional[bool] = None


class ProfileUpdateRequest(CamelModel):
    """Self-service profile update"""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    profile: Optional[Profile] = None
    
    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None:
            if not v.strip():
                raise ValueError('Name cannot be empty')
            return v.strip()
        return v


def user_response(user) -> "UserResponse":
    """Create UserResponse from User model"""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        is_verified=user.is_verified,
        profile=Profile(**user.profile),
        created_at=user.created_at
    )
