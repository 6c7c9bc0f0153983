"""
Database Configuration Module

This module sets up SQLAlchemy 2.0's asyncio extension as the entity store
for the catalog.

Why async?
==========
Detail and delete pages need several independent lookups (an author and all
of that author's books, a book and all of its copies). With an AsyncEngine
those lookups are scheduled concurrently on the event loop instead of
blocking a worker thread, and the request resumes once all of them are done.

Session Management Pattern
==========================
Every store operation opens its own short-lived AsyncSession from the
session factory ("session per operation"). An AsyncSession must not be
shared between concurrently running tasks, so a session per request would
serialize the lookups we want to run side by side.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from catalog.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an AsyncEngine for the given URL.

    SQLite files get a NullPool: every session opens its own connection,
    which lets concurrent readers proceed without sharing a connection.
    Server databases keep the default pool with pre-ping enabled.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo, poolclass=NullPool)

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections are alive before using
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    """
    Create a session factory bound to an engine.

    expire_on_commit=False keeps loaded attributes readable after the
    session is closed, so documents can be handed to templates.
    """
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


engine = build_engine(settings.database_url, echo=settings.db_echo)
SessionLocal = build_sessionmaker(engine)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all catalog collections.

        class Author(Base):
            __tablename__ = "authors"
            ...
    """
    pass


# =============================================================================
# Utility Functions
# =============================================================================
async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    Create all collections (tables) that do not exist yet.

    Used at startup in development and by the test suite.
    """
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind: AsyncEngine = engine) -> None:
    """
    Drop all collections.

    DANGER: This deletes all data! Only use in development and tests.
    """
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
