"""
Single source of truth for the staking tier configuration.

Turns settings into the immutable TierTable used by every service.
"""

from typing import NamedTuple

from staking.accrual import NOMINAL_PERIOD_DAYS, Tier, TierTable
from staking.config.settings import Settings, settings as default_settings


class TierDisplay(NamedTuple):
    """Display metadata for a tier."""

    tier: Tier
    display_name: str
    nominal_period_days: int


TIER_DISPLAY: dict[Tier, TierDisplay] = {
    Tier.NONE: TierDisplay(Tier.NONE, "None", NOMINAL_PERIOD_DAYS[Tier.NONE]),
    Tier.MONTH: TierDisplay(Tier.MONTH, "1 month", NOMINAL_PERIOD_DAYS[Tier.MONTH]),
    Tier.TWO_MONTHS: TierDisplay(Tier.TWO_MONTHS, "2 months", NOMINAL_PERIOD_DAYS[Tier.TWO_MONTHS]),
    Tier.YEAR: TierDisplay(Tier.YEAR, "1 year", NOMINAL_PERIOD_DAYS[Tier.YEAR]),
    Tier.TWO_YEARS: TierDisplay(Tier.TWO_YEARS, "2 years", NOMINAL_PERIOD_DAYS[Tier.TWO_YEARS]),
    Tier.THREE_YEARS: TierDisplay(Tier.THREE_YEARS, "3 years", NOMINAL_PERIOD_DAYS[Tier.THREE_YEARS]),
    Tier.FOUR_YEARS: TierDisplay(Tier.FOUR_YEARS, "4 years", NOMINAL_PERIOD_DAYS[Tier.FOUR_YEARS]),
    Tier.FIVE_YEARS: TierDisplay(Tier.FIVE_YEARS, "5 years", NOMINAL_PERIOD_DAYS[Tier.FIVE_YEARS]),
}


def build_tier_table(config: Settings | None = None) -> TierTable:
    """
    Build the tier table from settings.

    Args:
        config: Settings to read; the module-level settings when omitted

    Returns:
        Immutable TierTable
    """
    config = config or default_settings
    return TierTable(
        config.reward_percents,
        penalty_percent=config.abort_penalty_percents,
        nominal_periods=NOMINAL_PERIOD_DAYS,
    )


def get_tier_display(tier: int | Tier) -> TierDisplay:
    """
    Get display metadata for a tier.

    Args:
        tier: Tier or its raw index

    Returns:
        Display metadata

    Raises:
        InvalidTier: If the value is not a tier
    """
    return TIER_DISPLAY[TierTable.resolve(tier)]
