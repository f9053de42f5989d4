#!/usr/bin/env python3
"""Initialize staking ledger tables."""

import asyncio

from loguru import logger

from staking.config.settings import settings
from staking.utils.database import create_engine_from_settings, init_models
from staking.utils.logging import setup_logging


async def init_database() -> None:
    """Create all database tables."""
    logger.info("Connecting to database...")
    engine = create_engine_from_settings(settings)

    try:
        await init_models(engine)
    finally:
        await engine.dispose()

    logger.success("Database tables created successfully!")


if __name__ == "__main__":
    setup_logging(settings.log_level, settings.log_file)
    asyncio.run(init_database())
