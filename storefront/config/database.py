"""
Database configuration and connection management.
Handles MongoDB connection lifecycle and database operations.
"""
import asyncio
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from contextlib import asynccontextmanager
from fastapi import FastAPI
from starlette.requests import HTTPConnection

from .settings import Settings
from ..utils.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages MongoDB database connection and operations."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> bool:
        """
        Establish connection to MongoDB.

        Retries ``mongodb_connect_retries`` times, sleeping
        ``attempt * mongodb_retry_backoff_seconds`` between attempts.
        Returns False (and leaves the manager disconnected) when every
        attempt failed.
        """
        settings = self.settings
        for attempt in range(1, settings.mongodb_connect_retries + 1):
            client = None
            try:
                logger.info(f"🚀 Connecting to MongoDB (attempt {attempt}/{settings.mongodb_connect_retries})...")

                client = AsyncIOMotorClient(
                    settings.mongodb_url,
                    serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
                    connectTimeoutMS=settings.mongodb_connect_timeout_ms,
                    socketTimeoutMS=settings.mongodb_socket_timeout_ms,
                    maxPoolSize=settings.mongodb_max_pool_size,
                    minPoolSize=settings.mongodb_min_pool_size,
                    retryWrites=settings.mongodb_retry_writes,
                )
                await client.admin.command('ping')

                self.client = client
                self.database = client[settings.database_name]
                logger.info("✅ Connected to MongoDB successfully")
                return True

            except PyMongoError as db_error:
                logger.warning(f"⚠️  MongoDB connection attempt {attempt} failed: {db_error}")
                if client is not None:
                    client.close()
                if attempt < settings.mongodb_connect_retries:
                    await asyncio.sleep(attempt * settings.mongodb_retry_backoff_seconds)

        logger.error("❌ Could not connect to MongoDB, starting without a database")
        return False

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("🔌 MongoDB connection closed")

    async def create_indexes(self) -> None:
        """Create database indexes for lookups and uniqueness."""
        if self.database is None:
            logger.warning("Database not connected, skipping index creation")
            return

        try:
            await self.database.products.create_index("code", unique=True)
            await self.database.products.create_index("category")
            await self.database.products.create_index("availability")
            await self.database.products.create_index("price")

            await self.database.carts.create_index("user_id")

            await self.database.users.create_index("username", unique=True, sparse=True)
            await self.database.users.create_index("github_id", unique=True, sparse=True)

            await self.database.messages.create_index("created_at")

            logger.info("✅ Database indexes created successfully")

        except PyMongoError as index_error:
            logger.warning(f"⚠️  Failed to create indexes: {index_error}")

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self.database is None:
            raise DatabaseUnavailableError()
        return self.database

    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.database is not None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for database connection."""
    db_manager: DatabaseManager = app.state.db_manager

    # Startup
    logger.info("🚀 Starting up application...")
    if await db_manager.connect():
        await db_manager.create_indexes()

    yield

    # Shutdown
    await db_manager.disconnect()


def get_database_manager(connection: HTTPConnection) -> DatabaseManager:
    """Get the database manager attached to the running app."""
    return connection.app.state.db_manager


async def get_database(connection: HTTPConnection) -> AsyncIOMotorDatabase:
    """FastAPI dependency to get database instance (HTTP and websocket routes)."""
    return get_database_manager(connection).get_database()
