"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Deposit snapshot factory
- Default deposit snapshot
"""

import pytest

from staking.accrual import DepositSnapshot, Tier
from tests.helpers import START_TIME


@pytest.fixture
def make_deposit():
    """
    Factory building deposit snapshots.

    Defaults: 1000 units, Year tier, started and last claimed at START_TIME.

    Returns:
        Callable returning DepositSnapshot
    """
    def _make(
        amount: int = 1000,
        tier: Tier = Tier.YEAR,
        start_time: int = START_TIME,
        last_claim_timestamp: int | None = None,
        closed: bool = False,
    ) -> DepositSnapshot:
        return DepositSnapshot(
            amount=amount,
            tier=tier,
            start_time=start_time,
            last_claim_timestamp=(
                start_time if last_claim_timestamp is None else last_claim_timestamp
            ),
            closed=closed,
        )

    return _make


@pytest.fixture
def mock_deposit(make_deposit):
    """Default Year-tier deposit of 1000 units."""
    return make_deposit()
