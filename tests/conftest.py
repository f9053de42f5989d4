"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for tests
os.environ.setdefault("STAKING_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STAKING_OWNER_ADDRESS", "owner")
os.environ.setdefault("STAKING_LOG_LEVEL", "DEBUG")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from staking.accrual import RewardAccrualEngine, TierTable
from staking.services import SingleOwnerAccessControl, StakingService
from staking.utils.database import create_session_maker, init_models
from tests.helpers import (
    OTHER_USER,
    OWNER,
    TEST_PENALTY_PERCENT,
    TEST_REWARD_PERCENTS,
    USER,
    FakeTokenLedger,
)


@pytest.fixture
def tier_table():
    """Tier table with the test rates."""
    return TierTable(TEST_REWARD_PERCENTS, penalty_percent=TEST_PENALTY_PERCENT)


@pytest.fixture
def engine(tier_table):
    """Reward accrual engine over the test tier table."""
    return RewardAccrualEngine(tier_table)


@pytest.fixture
def token_ledger():
    """Fake token ledger with funded owner and users."""
    return FakeTokenLedger(
        {
            OWNER: 100_000_000,
            USER: 10_000_000,
            OTHER_USER: 10_000_000,
        }
    )


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Async session bound to the in-memory database."""
    session_maker = create_session_maker(db_engine)
    async with session_maker() as session:
        yield session


@pytest.fixture
def staking_service(db_session, token_ledger, tier_table):
    """Staking service over the in-memory database and fake token ledger."""
    return StakingService(
        db_session,
        token_ledger,
        tier_table=tier_table,
        access_control=SingleOwnerAccessControl(OWNER),
    )
