"""Database engine and session initialization."""

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from staking.config.settings import Settings, settings as default_settings
from staking.models import Base


def create_engine_from_settings(config: Settings | None = None) -> AsyncEngine:
    """Create the async engine described by settings."""
    config = config or default_settings
    return create_async_engine(
        config.database_url,
        echo=config.database_echo,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session maker bound to an engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all ledger tables that do not exist yet."""
    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
