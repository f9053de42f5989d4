"""
Reward accrual engine.

Standalone package for staking reward arithmetic: no database, no I/O.

Example:
    >>> from staking.accrual import RewardAccrualEngine, Tier, TierTable
    >>>
    >>> table = TierTable([0, 5, 11, 70, 150, 240, 340, 450], penalty_percent=10)
    >>> engine = RewardAccrualEngine(table)
    >>> engine.calculate_reward(1000, 40, table.reward_rate_percent(Tier.MONTH), 30)
    66
"""

from staking.accrual.core import (
    DepositInfo,
    DepositSnapshot,
    PoolInfo,
    RewardAccrualEngine,
    Tier,
    TierParameters,
    TierTable,
)
from staking.accrual.constants import (
    CLAIM_COOLDOWN_DAYS,
    CLAIM_COOLDOWN_SECONDS,
    NOMINAL_PERIOD_DAYS,
    PERCENT_BASE,
    SECONDS_PER_DAY,
)


__all__ = [
    # Core
    "RewardAccrualEngine",
    "TierTable",
    # Models
    "Tier",
    "TierParameters",
    "DepositSnapshot",
    "DepositInfo",
    "PoolInfo",
    # Constants
    "SECONDS_PER_DAY",
    "CLAIM_COOLDOWN_DAYS",
    "CLAIM_COOLDOWN_SECONDS",
    "NOMINAL_PERIOD_DAYS",
    "PERCENT_BASE",
]
