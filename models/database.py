"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATABASE = "neurotrack"


class Database:
    """Database connection manager."""
    
    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongodb_url)
    logger.info(f"Connected to MongoDB database '{get_database().name}'")


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Initialize MongoDB connection and all collections with indexes."""
    await connect_to_mongo()
    
    database = get_database()
    
    # Profiles: one per user, searched by name for friend lookup
    await database.profiles.create_index([("user_id", ASCENDING)], unique=True)
    await database.profiles.create_index([("name", ASCENDING)])
    
    # Daily entries: one per user per calendar day
    await database.daily_entries.create_index(
        [("user_id", ASCENDING), ("date", DESCENDING)], unique=True
    )
    
    # Goals and analyses are addressed by their own id within a user
    await database.goals.create_index([("user_id", ASCENDING), ("id", ASCENDING)], unique=True)
    await database.ai_analyses.create_index([("user_id", ASCENDING), ("id", ASCENDING)], unique=True)
    await database.ai_analyses.create_index([("user_id", ASCENDING), ("date", DESCENDING)])
    
    # Key/value settings (seen-popup flags and UI preferences)
    await database.user_settings.create_index(
        [("user_id", ASCENDING), ("setting_key", ASCENDING)], unique=True
    )
    
    # Friendship edges, stored in both directions
    await database.friendships.create_index(
        [("user_id", ASCENDING), ("friend_id", ASCENDING)], unique=True
    )
    
    logger.info("MongoDB initialized: All collections created with indexes")


def get_database():
    """Get database instance."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected")
    # Database named in the URL path, e.g. mongodb://host:27017/neurotrack
    return db.client.get_default_database(DEFAULT_DATABASE)

