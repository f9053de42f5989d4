"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from staking.models.base import Base
from staking.models.deposit import Deposit
from staking.models.reward_pool import REWARD_POOL_ID, RewardPool
from staking.models.types import TimestampType, TokenAmountType, UIntType

__all__ = [
    # Base
    "Base",
    # Core Models
    "Deposit",
    "RewardPool",
    "REWARD_POOL_ID",
    # Types
    "UIntType",
    "TokenAmountType",
    "TimestampType",
]
