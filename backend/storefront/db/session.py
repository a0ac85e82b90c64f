from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from fastapi import HTTPException
import logging

from storefront.core.config import settings

logger = logging.getLogger(__name__)

engine = None
SessionLocal = None


def mask_database_url(url: str) -> str:
    if settings.MYSQL_PASSWORD:
        return url.replace(settings.MYSQL_PASSWORD, "********")
    return url


if not settings.DATABASE_URL:
    logger.error("DATABASE_URL is not set. Please check your environment variables and configuration.")
else:
    logger.info(f"Attempting to connect to database: {mask_database_url(settings.DATABASE_URL)}")

    engine_kwargs = {"pool_pre_ping": True}
    if settings.DATABASE_URL.startswith("sqlite"):
        # File-backed SQLite (local runs and tests): a fresh connection per checkout
        engine_kwargs = {"poolclass": NullPool}
    else:
        engine_kwargs.update(pool_size=10, pool_recycle=1800)

    try:
        engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)
        SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        logger.info("Database engine and SessionLocal configured successfully.")
    except Exception as e:
        logger.error(f"Failed to create database engine or SessionLocal: {e}")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get a database session.
    Ensures the session is closed after the request.
    """
    if not SessionLocal:
        logger.error("SessionLocal is not initialized. Database connection might have failed during app startup.")
        raise HTTPException(
            status_code=503,  # Service Unavailable
            detail="Database connection is not available."
        )

    db: AsyncSession = SessionLocal()
    try:
        yield db
    finally:
        await db.close()
