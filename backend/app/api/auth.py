"""Authentication API endpoints"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.exceptions import AuthenticationException, ValidationException
from backend.app.core.security import get_current_user
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.auth_service import auth_service
from backend.app.schemas.auth import UserCreate, UserLogin, TokenResponse, TokenRefresh
from backend.app.schemas.user import UserResponse, ProfileUpdateRequest, user_response
from backend.app.models.user import User
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(**auth_service.create_token_pair(user), user=user_response(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new client or freelancer account
    
    Admin accounts are created with `scripts/create_admin.py`.
    
    ## Error Responses
    
    - **400 Bad Request**: Email already registered or invalid fields
    """
    user_repo = UserRepository(db)
    
    if await user_repo.get_by_email(user_data.email):
        raise ValidationException(
            "User already exists",
            errors=[{"field": "email", "message": "Email already registered"}]
        )
    
    user = await user_repo.create(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role
    )
    
    logger.info(f"User registered: {user.email}")
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """
    Authenticate by email and password
    
    Returns an access token for the `Authorization: Bearer <token>` header
    and a refresh token for `/refresh`.
    """
    user_repo = UserRepository(db)
    user = await user_repo.authenticate(credentials.email, credentials.password)
    
    if not user:
        raise AuthenticationException("Invalid credentials")
    
    logger.info(f"User logged in: {user.email}")
    return _token_response(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    token_data: TokenRefresh,
    db: AsyncSession = Depends(get_db)
):
    """Exchange a valid refresh token for a new token pair"""
    payload = auth_service.verify_refresh_token(token_data.refresh_token)
    if not payload:
        raise AuthenticationException("Invalid or expired refresh token")
    
    user = await UserRepository(db).get_by_id(payload.get("sub"))
    if not user:
        raise AuthenticationException("User not found")
    
    logger.info(f"Token refreshed for user: {user.email}")
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """The authenticated caller"""
    return user_response(current_user)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    updates: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update the caller's own name and profile; omitted fields stay unchanged"""
    changes = {}
    if updates.name is not None:
        changes["name"] = updates.name
    if updates.profile is not None:
        provided = updates.profile.model_fields_set
        if "bio" in provided:
            changes["bio"] = updates.profile.bio
        if "skills" in provided:
            changes["skills"] = updates.profile.skills
        if "hourly_rate" in provided:
            changes["hourly_rate"] = updates.profile.hourly_rate
    
    user = current_user
    if changes:
        user = await UserRepository(db).update(current_user, changes)
    return user_response(user)
