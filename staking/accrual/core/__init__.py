"""
Core accrual functionality.

Tier configuration, the reward accrual engine and their data models.
"""

from staking.accrual.core.models import (
    DepositInfo,
    DepositSnapshot,
    PoolInfo,
    Tier,
    TierParameters,
)
from staking.accrual.core.tier_table import TierTable
from staking.accrual.core.engine import RewardAccrualEngine

__all__ = [
    "RewardAccrualEngine",
    "TierTable",
    "Tier",
    "TierParameters",
    "DepositSnapshot",
    "DepositInfo",
    "PoolInfo",
]
