"""
Deposit model.

Represents a staked deposit of one account. Rows are append-only:
closing a deposit sets a flag, nothing is ever deleted.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from staking.accrual import Tier
from staking.models.base import Base
from staking.models.types import TimestampType, TokenAmountType


class Deposit(Base):
    """Deposit model - one staking position of an account."""

    __tablename__ = "deposits"
    __table_args__ = (
        UniqueConstraint(
            "account", "deposit_index", name="uq_deposit_account_index"
        ),
        CheckConstraint(
            "tier >= 1 AND tier <= 7",
            name="check_deposit_tier_range"
        ),
        CheckConstraint(
            "deposit_index >= 0",
            name="check_deposit_index_non_negative"
        ),
        CheckConstraint(
            "last_claim_timestamp >= start_time",
            name="check_deposit_claim_after_start"
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Owner and per-account position
    account: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    deposit_index: Mapped[int] = mapped_column(
        Integer, nullable=False
    )  # 0-based, never reused

    # Deposit details
    amount: Mapped[int] = mapped_column(TokenAmountType, nullable=False)
    tier: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-7
    start_time: Mapped[int] = mapped_column(TimestampType, nullable=False)
    last_claim_timestamp: Mapped[int] = mapped_column(
        TimestampType, nullable=False
    )

    # Status
    closed: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    closed_at: Mapped[int | None] = mapped_column(
        TimestampType, nullable=True
    )

    # Audit trail
    rewards_paid: Mapped[int] = mapped_column(
        TokenAmountType, nullable=False, default=0
    )
    penalty_paid: Mapped[int] = mapped_column(
        TokenAmountType, nullable=False, default=0
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Deposit(account={self.account}, index={self.deposit_index}, "
            f"tier={self.tier}, amount={self.amount}, closed={self.closed})>"
        )

    @property
    def staking_tier(self) -> Tier:
        """Tier as enum."""
        return Tier(self.tier)
