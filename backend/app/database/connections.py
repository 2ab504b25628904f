"""
Database connection management for MongoDB.

The provider owns a single Motor client for the process lifetime. The first
``acquire()`` connects under a lock so concurrent first callers share one
client; later calls return the cached handle without touching the network.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlsplit

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import Settings, get_settings
from app.core.errors import config_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionHandle:
    """An established client and the database it points at."""

    client: AsyncIOMotorClient
    db: AsyncIOMotorDatabase


def database_name_from_uri(uri: str, default: str) -> str:
    """
    Derive the database name from the path segment of a connection string.

    ``mongodb+srv://u:p@host/appdb?retryWrites=true`` gives ``appdb``;
    a URI without a path gives ``default``.
    """
    path = urlsplit(uri).path
    name = unquote(path.lstrip("/"))
    return name or default


class ConnectionProvider:
    """Lazily establishes and memoizes the MongoDB handle."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._handle: Optional[ConnectionHandle] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._handle is not None

    async def acquire(self) -> ConnectionHandle:
        """
        Get the cached handle, connecting on first use.

        Raises:
            ConfigurationError: If DATABASE_URL is not set
            Exception: Whatever the driver raised while connecting; the
                cache is left empty so the next call starts fresh
        """
        if self._handle is not None:
            return self._handle

        async with self._lock:
            # Another caller may have connected while we waited
            if self._handle is not None:
                return self._handle

            uri = self.settings.database_url
            if not uri:
                logger.error("DATABASE_URL is NOT set.")
                raise config_error()

            self._handle = await self._connect(uri)
            return self._handle

    async def _connect(self, uri: str) -> ConnectionHandle:
        timeout = self.settings.db_timeout_seconds
        client = AsyncIOMotorClient(
            uri,
            serverSelectionTimeoutMS=int(timeout * 1000),
        )
        try:
            # Motor connects lazily; ping forces server selection now
            await asyncio.wait_for(client.admin.command("ping"), timeout)
        except BaseException:
            # Also on cancellation, so no half-open client is left behind
            logger.error("Failed to connect to MongoDB", exc_info=True)
            client.close()
            self._handle = None
            raise

        db_name = database_name_from_uri(uri, self.settings.default_db_name)
        db = client[db_name]
        logger.info(f"Successfully connected to MongoDB database: {db_name}")
        return ConnectionHandle(client=client, db=db)

    async def close(self) -> None:
        """Close the client and clear the cache."""
        async with self._lock:
            if self._handle is not None:
                self._handle.client.close()
                self._handle = None


# Global provider instance
_provider: Optional[ConnectionProvider] = None


def get_connection_provider() -> ConnectionProvider:
    """Get or create the process-wide connection provider."""
    global _provider
    if _provider is None:
        _provider = ConnectionProvider(get_settings())
    return _provider


async def close_connections():
    """Close all database connections."""
    global _provider

    if _provider is not None:
        await _provider.close()
        _provider = None
