#!/usr/bin/env python3
"""Create the admin account if it does not exist yet"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backend.app.core.config import settings
from backend.app.core.database import AsyncSessionLocal, engine, init_db
from backend.app.core.logging import setup_logging
from backend.app.models.user import UserRole
from backend.app.repositories.user_repository import UserRepository

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


async def create_admin(name: str, email: str, password: str) -> bool:
    """
    Create a verified admin account
    
    Returns:
        True if the account was created, False if the email is taken
    """
    await init_db()
    
    async with AsyncSessionLocal() as session:
        user_repo = UserRepository(session)
        
        if await user_repo.get_by_email(email):
            logger.info(f"Admin user already exists: {email}")
            return False
        
        await user_repo.create(
            name=name,
            email=email,
            password=password,
            role=UserRole.ADMIN,
            is_verified=True
        )
    
    logger.info(f"Admin user created: {email}")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the FreelanceHub admin account")
    parser.add_argument("--name", default=settings.ADMIN_NAME)
    parser.add_argument("--email", default=settings.ADMIN_EMAIL)
    parser.add_argument("--password", default=settings.ADMIN_PASSWORD)
    args = parser.parse_args()
    
    if not args.password:
        logger.error("Admin password required: pass --password or set ADMIN_PASSWORD")
        return 1
    
    async def run():
        try:
            await create_admin(args.name, args.email, args.password)
        finally:
            await engine.dispose()
    
    asyncio.run(run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
