"""
Reward pool model.

Process-wide singleton row holding the fundable reward balance and
the collected early-exit penalties.
"""

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from staking.models.base import Base
from staking.models.types import TokenAmountType

# The pool is a singleton; its row always has this id
REWARD_POOL_ID = 1


class RewardPool(Base):
    """Reward pool - shared, finite reward balance of all deposits."""

    __tablename__ = "reward_pool"
    __table_args__ = (
        CheckConstraint(
            f"id = {REWARD_POOL_ID}", name="check_reward_pool_singleton"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, default=REWARD_POOL_ID)

    # Balances
    remaining_rewards: Mapped[int] = mapped_column(
        TokenAmountType, nullable=False, default=0
    )
    total_penalty: Mapped[int] = mapped_column(
        TokenAmountType, nullable=False, default=0
    )

    # Audit counters: remaining_rewards == total_funded - total_paid
    total_funded: Mapped[int] = mapped_column(
        TokenAmountType, nullable=False, default=0
    )
    total_paid: Mapped[int] = mapped_column(
        TokenAmountType, nullable=False, default=0
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<RewardPool(remaining_rewards={self.remaining_rewards}, "
            f"total_penalty={self.total_penalty})>"
        )
