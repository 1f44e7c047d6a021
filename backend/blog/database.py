"""
Blog API — Document Store Connector
=====================================

What:  Owns the single MongoDB client for the process and hands out collections.
How:   `DocumentStore.connect()` builds a `pymongo.AsyncMongoClient` and pings the
       server. The app lifespan creates one store, keeps it on `app.state.store`,
       and FastAPI dependencies pass it down to the repository layer.
Who:   Created by `blog.main.lifespan`; read by `get_store` / `get_post_repository`.
When:  Connected once at startup, closed at shutdown.

Connection Strategy:
    - One client per process; the driver pools connections internally.
    - The startup ping is bounded by MONGODB_TIMEOUT_MS.
    - Any failure raises StoreConnectionError. There is no retry and no backoff:
      the lifespan lets the error escape and the process exits.
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from blog.exceptions import DatabaseError, StoreConnectionError

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Lifecycle wrapper around one AsyncMongoClient.

    Attributes:
        uri:           MongoDB connection string
        database_name: Fallback database when the URI names none
        timeout_ms:    Server selection timeout used for every operation
    """

    def __init__(self, uri: str, database_name: str = "blog", timeout_ms: int = 5000):
        self.uri = uri
        self.database_name = database_name
        self.timeout_ms = timeout_ms
        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    @property
    def database(self) -> AsyncDatabase:
        if self._database is None:
            raise DatabaseError(message="Document store is not connected")
        return self._database

    def collection(self, name: str) -> AsyncCollection:
        """Returns a handle to the named collection in the connected database."""
        return self.database[name]

    async def connect(self) -> None:
        """
        Builds the client and verifies the server answers a ping.

        Raises:
            StoreConnectionError: URI is malformed or the server is unreachable.
        """
        try:
            client = AsyncMongoClient(
                self.uri,
                tz_aware=True,
                serverSelectionTimeoutMS=self.timeout_ms,
            )
        except (PyMongoError, ValueError) as e:
            logger.error("❌ MongoDB connection error: %s", str(e))
            raise StoreConnectionError(
                message=f"Invalid MongoDB connection string: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error("❌ MongoDB connection error: %s", str(e))
            await client.close()
            raise StoreConnectionError(
                message=f"MongoDB is unreachable: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        self._client = client
        self._database = client.get_default_database(default=self.database_name)
        logger.info("✅ MongoDB connected successfully (database=%s)", self._database.name)

    async def ping(self) -> bool:
        """Returns True when the server answers a ping. Used by /health."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True

    async def close(self) -> None:
        """Closes every pooled connection. Safe to call when never connected."""
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._database = None


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> DocumentStore:
    """
    FastAPI dependency returning the store owned by the running application.

    Raises:
        DatabaseError: the lifespan has not connected a store.
    """
    store: Optional[DocumentStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise DatabaseError(message="Document store is not connected")
    return store
