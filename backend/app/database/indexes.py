"""
Index management.
Ensures the indexes the auth flow relies on exist on startup.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database.databases import auth_db

logger = logging.getLogger(__name__)


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create necessary indexes for the auth database.

    The unique email index is what actually guarantees one user per
    normalized email; the service's existence check only avoids a
    pointless bcrypt round for obvious duplicates.
    """
    users = db[auth_db.Collections.USERS]
    await users.create_index(auth_db.Fields.EMAIL, unique=True)
    logger.info("Unique index on users.email ensured")
