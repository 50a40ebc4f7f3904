"""Store construction and the FastAPI dependency that hands it to routes."""

from fastapi import Request
from config.settings import Settings
from models.database import get_users_collection, init_mongo
from services.memory_store import InMemoryUserStore
from services.mongo_store import MongoUserStore
from services.user_store import UserStore
from utils.logger import setup_logger

logger = setup_logger(__name__)


async def open_user_store(app_settings: Settings) -> UserStore:
    """Build the store selected by ``store_backend``."""
    backend = app_settings.store_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory user store")
        return InMemoryUserStore()
    if backend != "mongo":
        raise ValueError(f"Unknown store backend: {app_settings.store_backend}")

    await init_mongo(app_settings)
    return MongoUserStore(get_users_collection())


def get_user_store(request: Request) -> UserStore:
    """Dependency returning the store attached to the running app."""
    return request.app.state.user_store
