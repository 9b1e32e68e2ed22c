"""MongoDB database connection and client management."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from alumni_api.config import settings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
ALUMNI_COLLECTION = "alumni"
EMPLOYMENT_COLLECTION = "employment"
FILES_COLLECTION = "files"
ACHIEVEMENTS_COLLECTION = "achievements"

# Global MongoDB client and database
mongodb_client: AsyncIOMotorClient | None = None
mongodb_database: AsyncIOMotorDatabase | None = None


async def init_mongodb() -> None:
    """Initialize MongoDB connection."""
    global mongodb_client, mongodb_database

    mongodb_client = AsyncIOMotorClient(settings.MONGODB_URL)
    mongodb_database = mongodb_client[settings.MONGODB_DATABASE]

    # Try to create indexes, but don't fail startup if it errors
    try:
        await _create_indexes()
    except Exception as e:
        logger.warning("Could not create MongoDB indexes (non-fatal): %s", e)


async def _create_indexes() -> None:
    """Create MongoDB indexes for the lookups the repositories run."""
    if mongodb_database is None:
        return

    users = mongodb_database[USERS_COLLECTION]
    await users.create_index("username", unique=True)
    await users.create_index("email", unique=True)

    alumni = mongodb_database[ALUMNI_COLLECTION]
    await alumni.create_index("student_number", unique=True)
    await alumni.create_index("email", unique=True)
    await alumni.create_index([("deleted_at", 1), ("created_at", -1)])

    employment = mongodb_database[EMPLOYMENT_COLLECTION]
    await employment.create_index([("alumni_id", 1), ("start_date", -1)])
    await employment.create_index([("deleted_at", 1), ("created_at", -1)])

    files = mongodb_database[FILES_COLLECTION]
    await files.create_index([("owner_id", 1), ("category", 1), ("uploaded_at", -1)])

    achievements = mongodb_database[ACHIEVEMENTS_COLLECTION]
    await achievements.create_index([("alumni_id", 1), ("created_at", -1)])
    await achievements.create_index("achievement_type")


async def close_mongodb() -> None:
    """Close MongoDB connection."""
    global mongodb_client, mongodb_database

    if mongodb_client:
        mongodb_client.close()
    mongodb_client = None
    mongodb_database = None


def get_mongodb() -> AsyncIOMotorDatabase:
    """Get MongoDB database instance."""
    if mongodb_database is None:
        raise RuntimeError("MongoDB is not initialized")
    return mongodb_database


async def ping_mongodb() -> bool:
    """Send a ping command to the server."""
    await get_mongodb().command("ping")
    return True
