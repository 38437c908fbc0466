"""User model"""

from sqlalchemy import Column, String, Boolean, Text, Float, JSON, Uuid, Enum as SQLEnum
from backend.app.core.database import Base
from backend.app.models.base import TimestampMixin
import uuid
import enum


class UserRole(str, enum.Enum):
    """User role enumeration"""
    CLIENT = "client"
    FREELANCER = "freelancer"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    """Marketplace account; profile fields are only meaningful for freelancers"""
    
    __tablename__ = "users"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.FREELANCER,
        index=True
    )
    is_verified = Column(Boolean, nullable=False, default=False)
    
    # Profile
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    hourly_rate = Column(Float, nullable=True)
    
    @property
    def profile(self) -> dict:
        return {
            "bio": self.bio,
            "skills": list(self.skills or []),
            "hourly_rate": self.hourly_rate,
        }
    
    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
