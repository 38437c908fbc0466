"""User repository for database operations"""

from typing import Optional, List, Dict, Any, Tuple
from uuid import UUID
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from passlib.context import CryptContext

from backend.app.models.user import User, UserRole
from backend.app.repositories.filters import LIKE_ESCAPE, contains_pattern
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class UserRepository:
    """Repository for User CRUD operations"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password"""
        return pwd_context.hash(password)
    
    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return pwd_context.verify(plain_password, hashed_password)
    
    async def create(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.FREELANCER,
        is_verified: bool = False
    ) -> User:
        """Create a new user"""
        user = User(
            name=name,
            email=email.lower(),
            password_hash=self.hash_password(password),
            role=role,
            is_verified=is_verified,
            skills=[]
        )
        
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        
        logger.info(f"Created user: {user.email} with role {user.role.value}")
        return user
    
    async def get_by_id(self, user_id) -> Optional[User]:
        """Get user by ID"""
        if not isinstance(user_id, UUID):
            try:
                user_id = UUID(str(user_id))
            except ValueError:
                return None
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()
    
    async def search(
        self,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[User], int]:
        """
        List users newest-first with optional filters
        
        Args:
            role: Only users with this role
            search: Case-insensitive substring matched against name and email
            skip: Pagination offset
            limit: Page size
        
        Returns:
            Page of users and the total number of matching users
        """
        conditions = []
        if role:
            conditions.append(User.role == role)
        if search:
            term = contains_pattern(search)
            conditions.append(or_(
                User.name.ilike(term, escape=LIKE_ESCAPE),
                User.email.ilike(term, escape=LIKE_ESCAPE)
            ))
        
        stmt = select(User).where(*conditions).order_by(User.created_at.desc()).offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        users = list(result.scalars().all())
        
        total = await self.session.scalar(select(func.count(User.id)).where(*conditions))
        return users, total or 0
    
    async def update(self, user: User, updates: Dict[str, Any]) -> User:
        """Apply field updates to a user"""
        for field, value in updates.items():
            setattr(user, field, value)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info(f"Updated user: {user.email} fields={sorted(updates)}")
        return user
    
    async def delete(self, user: User) -> None:
        """Delete user"""
        email = user.email
        await self.session.delete(user)
        await self.session.commit()
        logger.info(f"Deleted user: {email}")
    
    async def count(self) -> int:
        """Total number of users"""
        return await self.session.scalar(select(func.count(User.id))) or 0
    
    async def count_by_role(self) -> Dict[str, int]:
        """Number of users per role"""
        result = await self.session.execute(
            select(User.role, func.count(User.id)).group_by(User.role)
        )
        return {role.value: count for role, count in result.all()}
    
    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Authenticate user by email and password"""
        user = await self.get_by_email(email)
        
        if not user:
            logger.warning(f"Authentication failed: user {email} not found")
            return None
        
        if not self.verify_password(password, user.password_hash):
            logger.warning(f"Authentication failed: invalid password for {email}")
            return None
        
        logger.info(f"User authenticated: {email}")
        return user
