"""
Database - owns the connection pool for the configured backend.

One instance is built at startup (see main.py), stored on app.state and
disposed at shutdown. Nothing here is module-global.
"""

import ssl
from typing import AsyncIterator, Type

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from internship_registry.core.config import Settings
from internship_registry.core.logging import get_logger
from internship_registry.db.connection import CONNECTION_CLASSES, Connection

logger = get_logger(__name__)


class Database:
    """Pool of connections handed out as backend-specific Connection objects."""

    def __init__(self, engine: AsyncEngine, connection_class: Type[Connection]):
        self.engine = engine
        self.connection_class = connection_class

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build the engine for settings.db_type.

        Raises UnsupportedBackendError for anything but mysql/postgres, so a
        bad DB_TYPE stops the app at startup rather than on some later request.
        """
        backend = settings.backend

        connect_args = {}
        if settings.db_ssl:
            # TLS without certificate verification (managed DB hosts)
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = context

        # pool_size/max_overflow bound the pool; callers wait up to
        # pool_timeout seconds for a free connection
        engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            connect_args=connect_args,
            echo=settings.debug  # Log SQL queries in debug mode
        )
        logger.info("database_configured", backend=backend.value, pool_size=settings.db_pool_size)
        return cls(engine, CONNECTION_CLASSES[backend])

    async def connect(self) -> Connection:
        """Check a connection out of the pool. Caller must release() it."""
        return self.connection_class(await self.engine.connect())

    async def ping(self) -> bool:
        """
        Test if the database is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            connection = await self.connect()
        except Exception as e:
            logger.warning("database_unreachable", error=str(e))
            return False
        try:
            rows = await connection.query("SELECT 1 AS test")
            return list(rows[0].values())[0] == 1
        except Exception as e:
            logger.warning("database_ping_failed", error=str(e))
            return False
        finally:
            await connection.release()

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_connection(request: Request) -> AsyncIterator[Connection]:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/companies")
        async def list_companies(connection: Connection = Depends(get_connection)):
            ...
    """
    database: Database = request.app.state.database
    connection = await database.connect()
    try:
        yield connection
    finally:
        await connection.release()
