"""
Pure business logic for reward accrual.

This module contains standalone calculation logic without any
dependencies on database, ORM, or service code. All amounts are
unsigned integers and every division truncates.
"""

from loguru import logger

from staking.accrual.constants import (
    CLAIM_COOLDOWN_SECONDS,
    PERCENT_BASE,
    SECONDS_PER_DAY,
)
from staking.accrual.core.models import DepositSnapshot
from staking.accrual.core.tier_table import TierTable
from staking.utils.exceptions import CooldownActive


class RewardAccrualEngine:
    """
    Reward accrual engine.

    Computes what a deposit has earned as of a caller-supplied moment
    and enforces the claim cooldown. Holds no state beyond the tier table.
    """

    def __init__(self, tier_table: TierTable) -> None:
        """
        Initialize engine.

        Args:
            tier_table: Immutable tier configuration
        """
        self.tier_table = tier_table

    @staticmethod
    def elapsed_days(since: int, now: int) -> int:
        """
        Whole days between two timestamps.

        A `now` earlier than `since` counts as zero days, never negative.

        Example:
            >>> RewardAccrualEngine.elapsed_days(0, 40 * 86400 + 5)
            40
        """
        if now <= since:
            return 0
        return (now - since) // SECONDS_PER_DAY

    @staticmethod
    def calculate_reward(
        amount: int,
        elapsed_days: int,
        rate_percent: int,
        nominal_period_days: int,
    ) -> int:
        """
        Calculate reward for a holding window.

        Formula: (amount * elapsed_days * rate_percent) // (nominal_period_days * 100)

        Args:
            amount: Deposit principal
            elapsed_days: Whole days in the window
            rate_percent: Tier reward rate per nominal period
            nominal_period_days: Tier nominal period

        Returns:
            Reward amount, truncated

        Example:
            >>> RewardAccrualEngine.calculate_reward(1000, 40, 5, 30)
            66
        """
        if amount <= 0 or elapsed_days <= 0 or rate_percent <= 0:
            return 0

        if nominal_period_days <= 0:
            logger.warning(
                f"Reward requested for tier without nominal period "
                f"(period={nominal_period_days})"
            )
            return 0

        return (amount * elapsed_days * rate_percent) // (
            nominal_period_days * PERCENT_BASE
        )

    def accrued(self, deposit: DepositSnapshot, since: int, now: int) -> int:
        """Reward earned by a deposit between `since` and `now`."""
        parameters = self.tier_table.parameters(deposit.tier)
        return self.calculate_reward(
            deposit.amount,
            self.elapsed_days(since, now),
            parameters.reward_rate_percent,
            parameters.nominal_period_days,
        )

    def claimable_rewards(self, deposit: DepositSnapshot, now: int) -> int:
        """Reward owed to a claim: accrual since the last claim."""
        return self.accrued(deposit, deposit.last_claim_timestamp, now)

    def closing_rewards(self, deposit: DepositSnapshot, now: int) -> int:
        """
        Reward owed on closure: accrual over the full holding period.

        Counts from `start_time` even when claims already happened, so
        rewards claimed earlier are paid again on closure.
        """
        return self.accrued(deposit, deposit.start_time, now)

    @staticmethod
    def cooldown_remaining(deposit: DepositSnapshot, now: int) -> int:
        """Seconds until the next claim is allowed (0 when allowed)."""
        waited = now - deposit.last_claim_timestamp
        return max(CLAIM_COOLDOWN_SECONDS - waited, 0)

    def is_cooldown_active(self, deposit: DepositSnapshot, now: int) -> bool:
        """Whether a claim at `now` would be rejected."""
        return self.cooldown_remaining(deposit, now) > 0

    def ensure_cooldown_elapsed(self, deposit: DepositSnapshot, now: int) -> None:
        """
        Enforce the claim cooldown.

        Raises:
            CooldownActive: If less than the cooldown passed since the last claim
        """
        if self.is_cooldown_active(deposit, now):
            raise CooldownActive()

    def is_early_withdrawal(self, deposit: DepositSnapshot, now: int) -> bool:
        """Whether closing at `now` falls inside the tier's nominal period."""
        period_days = self.tier_table.nominal_period_days(deposit.tier)
        return now - deposit.start_time < period_days * SECONDS_PER_DAY

    def calculate_penalty(self, amount: int) -> int:
        """Early-exit penalty on a principal, truncated."""
        return (amount * self.tier_table.penalty_percent) // PERCENT_BASE

    @staticmethod
    def cap_payout(owed: int, remaining_rewards: int) -> int:
        """Limit a payout to what the pool still holds."""
        return max(min(owed, remaining_rewards), 0)
