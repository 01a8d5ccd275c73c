"""
Database connection and session management for SQLAlchemy 2.0.
Configured for async operations with PostgreSQL (asyncpg) or SQLite (aiosqlite).
"""
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy import text
from urllib.parse import urlparse
import logging

from photogallery.config import settings
from photogallery.exceptions import GalleryServiceError

logger = logging.getLogger(__name__)

# Create declarative base for models
Base = declarative_base()

_engine_args = {
    "echo": settings.SQL_ECHO,
}

# Pool settings only apply to PostgreSQL
if settings.DATABASE_URL and settings.DATABASE_URL.startswith("postgresql"):
    _engine_args.update({
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,  # Verify connections before using
        "pool_recycle": 3600,
        "connect_args": {
            "server_settings": {
                "application_name": "photogallery"
            }
        }
    })
elif not settings.DATABASE_URL:
    # In-memory SQLite must share one connection or every session sees an empty database
    _engine_args.update({
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    })

engine = create_async_engine(
    settings.DATABASE_URL if settings.DATABASE_URL else "sqlite+aiosqlite:///:memory:",
    **_engine_args
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    FastAPI dependency for database sessions.
    Provides one async session per request with commit/rollback at the end.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            pass
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except GalleryServiceError:
            await session.rollback()
            raise
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {str(e)}", exc_info=True)
            raise
        finally:
            await session.close()


def _validate_database_url(url: str) -> tuple[bool, str]:
    """
    Validate database URL and provide diagnostic information.
    Returns (is_valid, diagnostic_message)
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        return False, f"Error parsing DATABASE_URL: {str(e)}"

    if parsed.scheme.startswith("sqlite"):
        return True, f"SQLite database: {parsed.path or ':memory:'}"

    if not parsed.scheme.startswith("postgresql"):
        return False, f"Unsupported database URL scheme: {parsed.scheme}"

    if not parsed.hostname:
        return False, "No hostname found in DATABASE_URL"

    return True, f"Hostname: {parsed.hostname}, Port: {parsed.port or 5432}, Database: {parsed.path or '/postgres'}"


async def init_db():
    """
    Initialize database connection.
    Verifies connectivity and, when configured, creates missing tables.
    """
    if settings.DATABASE_URL:
        is_valid, diagnostic = _validate_database_url(settings.DATABASE_URL)
        if not is_valid:
            logger.error(f"Invalid DATABASE_URL: {diagnostic}")
            raise ValueError(f"Invalid DATABASE_URL: {diagnostic}")
        logger.info(f"Database URL validation: {diagnostic}")
    else:
        logger.warning("DATABASE_URL not set, using in-memory SQLite database")

    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if settings.CREATE_TABLES_ON_STARTUP or not settings.DATABASE_URL:
            # Import models so they are registered on Base.metadata
            from photogallery import models  # noqa: F401
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")
    logger.info("Database connection initialized successfully")


async def close_db():
    """Close database connections."""
    await engine.dispose()
    logger.info("Database connections closed")
