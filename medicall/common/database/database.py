import logging
from typing import AsyncGenerator
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from medicall.common.config import settings

logger = logging.getLogger(__name__)

# SQLAlchemy async engine and session setup
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_recycle=1800,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

async def connect_to_db():
    """Connect to the database. The schema is managed with `alembic upgrade head`."""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connected successfully")
    except Exception:
        logger.exception("Error connecting to the database")
        raise

async def close_db_connection():
    """Close the database connection."""
    await engine.dispose()
    logger.info("Database connection closed")

# Dependency for using a session in routes
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for use in FastAPI routes."""
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def contains_pattern(term: str) -> str:
    """ILIKE pattern matching ``term`` anywhere, with its own wildcards escaped."""
    escaped = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
