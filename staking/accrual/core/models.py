"""Pydantic models for the accrual engine."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Tier(IntEnum):
    """Staking duration tiers. NONE only pads index 0 of the rate table."""

    NONE = 0
    MONTH = 1
    TWO_MONTHS = 2
    YEAR = 3
    TWO_YEARS = 4
    THREE_YEARS = 5
    FOUR_YEARS = 6
    FIVE_YEARS = 7

    @property
    def is_selectable(self) -> bool:
        """Whether new deposits may use this tier."""
        return self is not Tier.NONE


class TierParameters(BaseModel):
    """Model for one tier of the rate table.

    The reward rate is a whole percent of principal earned per
    nominal period elapsed.
    """

    model_config = ConfigDict(frozen=True)

    tier: Tier = Field(..., description="Tier this row describes")
    nominal_period_days: int = Field(..., ge=0, description="Native accrual window in days")
    reward_rate_percent: int = Field(..., ge=0, description="Percent of principal per nominal period")


class DepositSnapshot(BaseModel):
    """Read-only view of a deposit record.

    Decoupled from the ORM row so callers never hold live database state.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    amount: int = Field(..., ge=0, description="Locked principal")
    start_time: int = Field(..., description="Unix timestamp of deposit creation")
    tier: Tier = Field(..., description="Tier chosen at creation")
    last_claim_timestamp: int = Field(..., description="Unix timestamp of the last reward claim")
    closed: bool = Field(default=False, description="Whether the deposit has been withdrawn")


class DepositInfo(DepositSnapshot):
    """Deposit snapshot enriched with ledger position and payable rewards."""

    account: str = Field(..., description="Owning account")
    index: int = Field(..., ge=0, description="Zero-based per-account index")
    rewards_paid: int = Field(default=0, ge=0, description="Rewards paid on this deposit so far")
    penalty_paid: int = Field(default=0, ge=0, description="Penalty withheld on early closure")
    closed_at: int | None = Field(default=None, description="Unix timestamp of closure")
    rewards_amount: int = Field(
        default=0, ge=0, description="Rewards that a claim would pay right now (pool-capped)"
    )


class PoolInfo(BaseModel):
    """Snapshot of the reward pool."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    remaining_rewards: int = Field(..., ge=0, description="Fundable, unclaimed rewards")
    total_penalty: int = Field(..., ge=0, description="Collected penalties available to the owner")
    total_funded: int = Field(default=0, ge=0, description="Rewards ever added to the pool")
    total_paid: int = Field(default=0, ge=0, description="Rewards ever paid out of the pool")
