"""Auth gate: bearer token resolution and role checks"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.exceptions import AuthenticationException, AuthorizationException
from backend.app.models.user import User, UserRole
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.auth_service import auth_service
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

# Missing credentials are reported as 401 by get_current_user
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token
    
    Args:
        credentials: HTTP Bearer credentials
        db: Database session
    
    Returns:
        Current user
    
    Raises:
        AuthenticationException: If the token is missing, invalid or
            expired, or its user no longer exists
    """
    if credentials is None:
        raise AuthenticationException("No token, authorization denied")
    
    payload = auth_service.verify_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationException("Token is not valid")
    
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token missing user ID")
        raise AuthenticationException("Token is not valid")
    
    user_repo = UserRepository(db)
    user = await user_repo.get_by_id(user_id)
    
    if not user:
        logger.warning(f"User not found: {user_id}")
        raise AuthenticationException("Token is not valid")
    
    return user


class RoleChecker:
    """Dependency class for role-based access control"""
    
    def __init__(self, allowed_roles: list[UserRole]):
        self.allowed_roles = allowed_roles
    
    def __call__(self, current_user: User = Depends(get_current_user)) -> User:
        """
        Check if current user has required role
        
        Raises:
            AuthorizationException: If user doesn't have required role
        """
        if current_user.role not in self.allowed_roles:
            logger.warning(
                f"User {current_user.email} with role {current_user.role.value} "
                f"attempted to access resource requiring roles: {[r.value for r in self.allowed_roles]}"
            )
            raise AuthorizationException("Access denied. Insufficient permissions.")
        
        return current_user


# Pre-defined role checkers
require_admin = RoleChecker([UserRole.ADMIN])
require_client = RoleChecker([UserRole.CLIENT])
require_freelancer = RoleChecker([UserRole.FREELANCER])
require_client_or_admin = RoleChecker([UserRole.CLIENT, UserRole.ADMIN])
