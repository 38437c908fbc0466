"""Pytest configuration and shared fixtures"""

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from backend.app.core.database import Base, get_db, json_serializer
from backend.app.main import app
from backend.app.models import User, UserRole
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.auth_service import AuthService

TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine(tmp_path):
    """Fresh SQLite database file per test"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test_freelancehub.db'}",
        echo=False,
        json_serializer=json_serializer
    )
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Create test session factory"""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for direct repository and service use"""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, with get_db bound to the test database"""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session
    
    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def create_test_user(
    db_session: AsyncSession,
    role: UserRole = UserRole.FREELANCER,
    name: str = None,
    email: str = None
) -> User:
    """Create a user with TEST_PASSWORD"""
    repo = UserRepository(db_session)
    count = await repo.count()
    return await repo.create(
        name=name or f"Test {role.value.title()} {count}",
        email=email or f"{role.value}{count}@example.com",
        password=TEST_PASSWORD,
        role=role
    )


def get_auth_headers(user: User) -> dict:
    """Bearer header for a test user"""
    token = AuthService().create_access_token(str(user.id), user.email, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client_user(db_session) -> User:
    return await create_test_user(db_session, UserRole.CLIENT, name="Carol Client")


@pytest.fixture
async def other_client(db_session) -> User:
    return await create_test_user(db_session, UserRole.CLIENT, name="Oscar Other")


@pytest.fixture
async def freelancer(db_session) -> User:
    return await create_test_user(db_session, UserRole.FREELANCER, name="Fiona Freelancer")


@pytest.fixture
async def second_freelancer(db_session) -> User:
    return await create_test_user(db_session, UserRole.FREELANCER, name="Frank Freelancer")


@pytest.fixture
async def admin_user(db_session) -> User:
    return await create_test_user(db_session, UserRole.ADMIN, name="Ada Admin")


@pytest.fixture
def sample_job_data():
    """Valid job creation payload"""
    return {
        "title": "UX Designer Needed",
        "description": "Design our mobile app UI.",
        "category": "Design",
        "skills": ["Figma", "UX Research"],
        "budget": {"type": "fixed", "amount": 500},
        "experience": "entry",
    }


# 60 characters
SAMPLE_PROPOSAL = "Seasoned UX designer with a strong mobile portfolio" + "!" * 9


@pytest.fixture
def sample_application_data():
    """Valid application payload"""
    return {
        "proposal": SAMPLE_PROPOSAL,
        "bidAmount": 450,
        "estimatedDuration": "1 week",
    }
