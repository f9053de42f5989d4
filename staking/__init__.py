"""
Staking reward ledger.

Lock a fungible balance for a duration tier, accrue time-proportional
rewards from a shared finite pool, pay an early-exit penalty.

Example:
    >>> from staking.services import StakingService
    >>>
    >>> async with session_maker() as session:
    ...     service = StakingService(session, token_ledger)
    ...     index = await service.create_deposit("alice", 1000, Tier.YEAR, now)
"""

__version__ = "1.0.0"
