"""Authentication service for JWT token management"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt

from backend.app.core.config import settings
from backend.app.core.logging import get_logger
from backend.app.models.user import UserRole

logger = get_logger(__name__)


class AuthService:
    """Service for authentication and JWT token management"""
    
    def __init__(self):
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.access_token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.refresh_token_expire_days = settings.REFRESH_TOKEN_EXPIRE_DAYS
    
    def _encode(self, claims: Dict[str, Any], expires_in: timedelta) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {**claims, "iat": now, "exp": now + expires_in}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
    
    def create_access_token(
        self,
        user_id: str,
        email: str,
        role: UserRole,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Generate JWT access token
        
        Args:
            user_id: User ID
            email: User email
            role: User role
            expires_delta: Optional custom expiration time
        
        Returns:
            JWT token string
        """
        token = self._encode(
            {"sub": str(user_id), "email": email, "role": role.value, "type": "access"},
            expires_delta or timedelta(minutes=self.access_token_expire_minutes)
        )
        logger.info(f"Created access token for user: {email}")
        return token
    
    def create_refresh_token(
        self,
        user_id: str,
        email: str,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Generate JWT refresh token
        
        Args:
            user_id: User ID
            email: User email
            expires_delta: Optional custom expiration time
        
        Returns:
            JWT refresh token string
        """
        token = self._encode(
            {"sub": str(user_id), "email": email, "type": "refresh"},
            expires_delta or timedelta(days=self.refresh_token_expire_days)
        )
        logger.info(f"Created refresh token for user: {email}")
        return token
    
    def create_token_pair(self, user) -> Dict[str, str]:
        """Access and refresh tokens for a user"""
        return {
            "access_token": self.create_access_token(str(user.id), user.email, user.role),
            "refresh_token": self.create_refresh_token(str(user.id), user.email),
        }
    
    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode JWT token
        
        Args:
            token: JWT token string
        
        Returns:
            Token payload if valid, None otherwise
        """
        try:
            # jose rejects expired tokens with ExpiredSignatureError
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"Token verification failed: {str(e)}")
            return None
    
    def _verify_typed(self, token: str, token_type: str) -> Optional[Dict[str, Any]]:
        payload = self.verify_token(token)
        
        if not payload:
            return None
        
        if payload.get("type") != token_type:
            logger.warning(f"Token is not an {token_type} token")
            return None
        
        return payload
    
    def verify_access_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify access token specifically"""
        return self._verify_typed(token, "access")
    
    def verify_refresh_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify refresh token specifically"""
        return self._verify_typed(token, "refresh")


# Global auth service instance
auth_service = AuthService()
