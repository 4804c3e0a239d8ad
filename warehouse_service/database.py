"""Database configuration and session management."""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from warehouse_service.config import settings
from warehouse_service.exceptions import StoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_async_database_url(url: str) -> str:
    """Convert a standard PostgreSQL URL to an async-compatible URL.

    Hosting providers hand out URLs in the format postgresql://...
    asyncpg requires postgresql+asyncpg://...
    """
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


# Create async engine
async_engine = create_async_engine(
    get_async_database_url(settings.database_url),
    echo=settings.debug,
    pool_pre_ping=True,
)

# Create async session factory
async_session_factory = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transaction(
    session: AsyncSession,
    read_only: bool = False,
) -> AsyncIterator[AsyncSession]:
    """Scope a single service operation to one database transaction.

    Read-write scopes commit when the block exits cleanly. Read-only scopes
    always end in a rollback, so nothing done inside them is persisted, and
    any pending change found at exit is reported as a StoreError. Every
    failure path rolls back before the exception propagates.

    Args:
        session: Session the operation runs on
        read_only: Whether the operation must not write

    Yields:
        The same session, for convenience
    """
    try:
        yield session
    except Exception:
        await session.rollback()
        raise

    if read_only:
        has_pending_writes = bool(session.new or session.dirty or session.deleted)
        await session.rollback()
        if has_pending_writes:
            raise StoreError("Write attempted inside a read-only transaction")
        return

    try:
        await session.commit()
    except SQLAlchemyError as e:
        logger.exception("Transaction commit failed")
        await session.rollback()
        raise StoreError(f"Failed to commit transaction: {e}") from e
