"""Database connection management"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
import psycopg
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from habitflow.config import DATABASE_URL, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE
from habitflow.exceptions import StoreConnectionError

logger = logging.getLogger(__name__)


class Database:
    """Database connection pool manager"""

    def __init__(self, connection_string: str = DATABASE_URL):
        self.connection_string = connection_string
        self._pool: Optional[AsyncConnectionPool] = None

    async def init_pool(self) -> None:
        """Initialize connection pool"""
        logger.info("Initializing database connection pool")
        self._pool = AsyncConnectionPool(
            self.connection_string,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
            open=False
        )
        await self._pool.open()

    async def close_pool(self) -> None:
        """Close connection pool"""
        if self._pool:
            logger.info("Closing database connection pool")
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[psycopg.AsyncConnection, None]:
        """Get database connection from pool"""
        if not self._pool:
            raise StoreConnectionError("Database pool not initialized", operation="db_connection")

        async with self._pool.connection() as conn:
            conn.row_factory = dict_row
            yield conn

    async def listen_connection(self) -> psycopg.AsyncConnection:
        """
        Dedicated autocommit connection for LISTEN

        Kept outside the pool: a listening connection is held for the
        lifetime of the subscription.
        """
        return await psycopg.AsyncConnection.connect(self.connection_string, autocommit=True)


# Global database instance
db = Database()
