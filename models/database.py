"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING
from typing import Optional
from config.settings import Settings, settings as default_settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATABASE = "exercise_tracker"


class Database:
    """Database connection manager."""
    
    client: Optional[AsyncIOMotorClient] = None
    name: Optional[str] = None


db = Database()


async def connect_to_mongo(app_settings: Settings = default_settings):
    """Create database connection."""
    db.client = AsyncIOMotorClient(app_settings.mongodb_url)
    db.name = app_settings.mongodb_database or None
    logger.info(f"Connected to MongoDB database: {get_database().name}")


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo(app_settings: Settings = default_settings):
    """Initialize MongoDB connection and the users collection indexes."""
    await connect_to_mongo(app_settings)
    
    # Username uniqueness is enforced by the index, not only by lookups
    users_collection = get_users_collection()
    await users_collection.create_index([("username", ASCENDING)], unique=True)
    
    logger.info("MongoDB initialized: users collection indexed")


def get_database():
    """Get database instance."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected")
    if db.name:
        return db.client[db.name]
    return db.client.get_default_database(DEFAULT_DATABASE)


def get_users_collection() -> AsyncIOMotorCollection:
    """Get users collection."""
    return get_database().users
