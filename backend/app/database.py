"""
RideRelay Backend: Database Session Management
================================================

What:  The `Database` object (async engine + session factory), the ORM base
       class, and the FastAPI session dependency.
How:   `create_app()` constructs exactly one `Database` and stores it on
       `app.state.database`. The lifespan hook checks connectivity on startup
       and disposes the engine on shutdown. Request handlers receive sessions
       through `get_db_session`, which commits on success and rolls back on
       error.

Connection pooling (PostgreSQL):
    pool_size=20, max_overflow=10, pre-ping on, recycle every hour.
    SQLite URLs (tests, local hacking) skip the pool arguments because the
    SQLite dialect picks its own pool class.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential_jitter,
)

from app.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, Alembic and the
    test fixtures that call `create_all`.
    """
    pass


class Database:
    """
    Owner of the engine and session factory.

    One instance per application. Nothing else in the codebase creates an
    engine, so closing this object closes every pooled connection.
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        engine_kwargs = {"echo": settings.log_level == "DEBUG"}
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: documents are read after commit when
        # building responses
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._connect_attempts = settings.db_connect_attempts
        self._connect_min_wait = settings.db_connect_min_wait
        self._connect_max_wait = settings.db_connect_max_wait

    async def ping(self) -> bool:
        """Run `SELECT 1`. Returns False instead of raising (used by /health)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def wait_until_ready(self) -> None:
        """
        Block startup until the database answers, with exponential backoff.

        Raises the last connection error once the attempts are exhausted.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._connect_attempts),
            wait=wait_exponential_jitter(
                initial=self._connect_min_wait,
                max=self._connect_max_wait,
                jitter=1,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                async with self.engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")

    async def create_all(self) -> None:
        """Create every mapped table that does not exist yet (tests and local dev)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections. Called once, at application shutdown."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's Database
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns the connection to the pool)
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
