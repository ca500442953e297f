"""Database engine and session management for the cloud trip store."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs.settings import PersistenceConfig
from app.errors import PersistenceConfigurationError
from app.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

type SessionFactory = async_sessionmaker[SQLModelAsyncSession]


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def create_engine(config: PersistenceConfig) -> AsyncEngine:
    """
    Build the async engine for the configured database.

    Raises:
        PersistenceConfigurationError: If no database URL is configured.
    """
    if not config.database_url:
        msg = "DATABASE_URL is required for the cloud persistence backend"
        raise PersistenceConfigurationError(detail=msg)

    engine = create_async_engine(
        config.database_url,
        echo=config.database_echo,
        pool_pre_ping=True,
    )
    if config.database_echo:
        _configure_engine_events(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> SessionFactory:
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@asynccontextmanager
async def transaction(session_factory: SessionFactory) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction(session_factory) as session:
            session.add(TripDB(...))
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise
        finally:
            await session.close()


async def init_db(engine: AsyncEngine) -> None:
    """
    Create the trips table if it does not exist yet.

    Note:
        This is a simple initialization for development.
        For production, use proper migration tools like Alembic.
    """
    async with engine.begin() as conn:
        from app.models import TripDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def close_db(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("Database connections closed")
