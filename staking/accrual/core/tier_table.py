"""
Tier table.

Immutable, construction-time mapping from tier to nominal period and
reward rate, plus the single early-exit penalty rate.
"""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from staking.accrual.constants import NOMINAL_PERIOD_DAYS, PERCENT_BASE, TIER_COUNT
from staking.accrual.core.models import Tier, TierParameters
from staking.utils.exceptions import InvalidTier


class TierTable:
    """
    Read-only rate table keyed by Tier.

    Example:
        >>> table = TierTable([0, 5, 11, 70, 150, 240, 340, 450], penalty_percent=10)
        >>> table.reward_rate_percent(Tier.MONTH)
        5
    """

    def __init__(
        self,
        reward_rates: Sequence[int],
        penalty_percent: int,
        nominal_periods: Mapping[Tier, int] = NOMINAL_PERIOD_DAYS,
    ) -> None:
        """
        Initialize tier table.

        Args:
            reward_rates: Eight percents, index-aligned with Tier; index 0 must be 0
            penalty_percent: Percent of principal forfeited on early exit (0-100)
            nominal_periods: Nominal period in days per tier

        Raises:
            ValueError: If the table is malformed
        """
        if len(reward_rates) != TIER_COUNT:
            raise ValueError(
                f"Expected {TIER_COUNT} reward rates, got {len(reward_rates)}"
            )
        if reward_rates[Tier.NONE] != 0:
            raise ValueError("Reward rate of the NONE tier must be 0")
        if any(rate < 0 for rate in reward_rates):
            raise ValueError("Reward rates must not be negative")
        if not 0 <= penalty_percent <= PERCENT_BASE:
            raise ValueError(
                f"Penalty percent must be 0-{PERCENT_BASE}, got {penalty_percent}"
            )

        rows: dict[Tier, TierParameters] = {}
        for tier in Tier:
            period = nominal_periods[tier]
            if tier.is_selectable and period <= 0:
                raise ValueError(f"Nominal period of {tier.name} must be positive")
            rows[tier] = TierParameters(
                tier=tier,
                nominal_period_days=period,
                reward_rate_percent=int(reward_rates[tier]),
            )

        self._rows = MappingProxyType(rows)
        self._penalty_percent = int(penalty_percent)

    def __repr__(self) -> str:
        """String representation."""
        return f"<TierTable(rates={list(self.reward_rates)}, penalty={self._penalty_percent}%)>"

    @staticmethod
    def resolve(tier: int | Tier) -> Tier:
        """
        Coerce a raw tier value, rejecting out-of-range input.

        Raises:
            InvalidTier: If the value is not a Tier
        """
        if isinstance(tier, bool):
            raise InvalidTier(f"Invalid staking period: {tier!r}")
        try:
            return Tier(tier)
        except ValueError as e:
            raise InvalidTier(f"Invalid staking period: {tier!r}") from e

    def parameters(self, tier: int | Tier) -> TierParameters:
        """Look up the full row for a tier."""
        return self._rows[self.resolve(tier)]

    def nominal_period_days(self, tier: int | Tier) -> int:
        """Nominal period of a tier in days."""
        return self.parameters(tier).nominal_period_days

    def reward_rate_percent(self, tier: int | Tier) -> int:
        """Reward rate of a tier, also usable as a by-index rate lookup."""
        return self.parameters(tier).reward_rate_percent

    @property
    def penalty_percent(self) -> int:
        """Early-exit penalty as a percent of principal."""
        return self._penalty_percent

    @property
    def reward_rates(self) -> tuple[int, ...]:
        """All eight configured rates, index-aligned with Tier."""
        return tuple(self._rows[tier].reward_rate_percent for tier in Tier)

    def selectable_tiers(self) -> list[Tier]:
        """Tiers accepted for new deposits."""
        return [tier for tier in Tier if tier.is_selectable]
