"""
Constants for the reward accrual engine.

Time and percentage bases shared by every reward computation.
"""

from staking.accrual.core.models import Tier

SECONDS_PER_DAY = 60 * 60 * 24

# Minimum wait between two reward claims on one deposit
CLAIM_COOLDOWN_DAYS = 7
CLAIM_COOLDOWN_SECONDS = CLAIM_COOLDOWN_DAYS * SECONDS_PER_DAY

PERCENT_BASE = 100

# Native accrual window of each tier, in days
NOMINAL_PERIOD_DAYS: dict[Tier, int] = {
    Tier.NONE: 0,
    Tier.MONTH: 30,
    Tier.TWO_MONTHS: 60,
    Tier.YEAR: 365,
    Tier.TWO_YEARS: 730,
    Tier.THREE_YEARS: 1095,
    Tier.FOUR_YEARS: 1460,
    Tier.FIVE_YEARS: 1825,
}

TIER_COUNT = len(Tier)
