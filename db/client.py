"""
MongoDB connection management with async motor.
Caches a single client per application and revalidates it before reuse.
"""
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from typing import Any, Callable, Dict, Optional
import logging

from api.config import Settings
from db.errors import ConfigurationError, DatabaseConnectionError

logger = logging.getLogger(__name__)

TRIPS_COLLECTION = "trips"


class DatabaseClient:
    """
    MongoDB client wrapper with a liveness-checked cached connection.

    Usage:
        db_client = DatabaseClient(settings)
        db = await db_client.get_database()   # connects on first call
        # ... use db
        await db_client.disconnect()
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[..., Any] = AsyncIOMotorClient
    ):
        self.settings = settings
        self.client_factory = client_factory
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    def _client_options(self) -> Dict[str, Any]:
        s = self.settings
        options = {
            "maxPoolSize": s.max_pool_size,
            "minPoolSize": s.min_pool_size,
            "connectTimeoutMS": s.connect_timeout_ms,
            "serverSelectionTimeoutMS": s.server_selection_timeout_ms,
            "socketTimeoutMS": s.socket_timeout_ms,
            "retryReads": True,
            "tz_aware": True,
        }
        if s.tls_allow_invalid:
            options.update(
                tls=True,
                tlsAllowInvalidCertificates=True,
                tlsAllowInvalidHostnames=True
            )
        return options

    async def connect(self) -> AsyncIOMotorDatabase:
        """
        Open a new client and verify it with a ping.

        Returns:
            AsyncIOMotorDatabase instance

        Raises:
            ConfigurationError: If URI or database name is unset
            DatabaseConnectionError: If the server cannot be reached
        """
        if not self.settings.mongo_uri:
            raise ConfigurationError("MONGODB_URI is not configured")
        if not self.settings.db_name:
            raise ConfigurationError("DB_NAME is not configured")

        logger.info("Connecting to MongoDB...")
        client = None
        try:
            client = self.client_factory(self.settings.mongo_uri, **self._client_options())
            db = client[self.settings.db_name]
            await db.command("ping")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {str(e)}")
            if client is not None:
                client.close()
            raise DatabaseConnectionError(str(e)) from e

        if self.db is not None:
            # A concurrent request finished connecting first; keep its client.
            client.close()
            return self.db

        self.client = client
        self.db = db
        logger.info(f"Connected to MongoDB: {self.settings.db_name}")
        return db

    async def get_database(self) -> AsyncIOMotorDatabase:
        """
        Return the cached database, reconnecting if it no longer answers a ping.

        Raises:
            ConfigurationError: If URI or database name is unset
            DatabaseConnectionError: If the server cannot be reached
        """
        cached = self.db
        if cached is not None:
            try:
                await cached.command("ping")
                logger.debug("Reusing cached MongoDB connection")
                return cached
            except PyMongoError as e:
                if self.db is not cached and self.db is not None:
                    # Another request already replaced the stale connection.
                    return self.db
                logger.warning(f"Cached MongoDB connection failed ping, reconnecting: {str(e)}")
                if self.db is cached:
                    await self.disconnect()

        return await self.connect()

    async def ping(self) -> Dict[str, Any]:
        """Acquire the database and return the raw ping reply."""
        db = await self.get_database()
        try:
            return await db.command("ping")
        except PyMongoError as e:
            raise DatabaseConnectionError(str(e)) from e

    async def disconnect(self):
        """Close the MongoDB client and drop the cache."""
        if self.client is not None:
            self.client.close()
            logger.info("Disconnected from MongoDB")
        self.client = None
        self.db = None

    def is_connected(self) -> bool:
        """Check whether a cached connection exists (not whether it is alive)."""
        return self.db is not None
