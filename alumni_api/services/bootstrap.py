"""Startup tasks."""

import logging

from alumni_api.config import settings
from alumni_api.core.permissions import Role
from alumni_api.core.security import hash_password
from alumni_api.db.mongodb import get_mongodb
from alumni_api.db.postgres import async_session_factory
from alumni_api.repositories.base import UserRepository
from alumni_api.repositories.mongo.users import MongoUserRepository
from alumni_api.repositories.sql.users import SqlUserRepository

logger = logging.getLogger(__name__)


async def create_first_admin(users: UserRepository) -> bool:
    """Create the configured admin account unless it already exists."""
    username = settings.FIRST_ADMIN_USERNAME
    email = settings.FIRST_ADMIN_EMAIL
    password = settings.FIRST_ADMIN_PASSWORD
    if not (username and email and password):
        return False
    username = username.lower()

    if await users.find_duplicate(username, email):
        return False

    await users.create(
        {
            "username": username,
            "email": email,
            "password_hash": hash_password(password),
            "full_name": "Administrator",
            "role": Role.ADMIN.value,
            "is_active": True,
        }
    )
    logger.info("Created first admin account %s", username)
    return True


async def ensure_first_admin() -> None:
    """Seed the first admin into whichever store holds staff accounts."""
    if settings.uses_mongo:
        await create_first_admin(MongoUserRepository(get_mongodb()))
        return

    async with async_session_factory() as session:
        if await create_first_admin(SqlUserRepository(session)):
            await session.commit()
