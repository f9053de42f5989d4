"""
Reward pool repository.

Data access layer for the RewardPool singleton.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from staking.models.reward_pool import REWARD_POOL_ID, RewardPool
from staking.repositories.base import BaseRepository


class RewardPoolRepository(BaseRepository[RewardPool]):
    """Reward pool repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reward pool repository."""
        super().__init__(RewardPool, session)

    async def get_pool(self, for_update: bool = False) -> RewardPool:
        """
        Get the pool row, creating an empty one on first use.

        Args:
            for_update: Lock the row for the current transaction

        Returns:
            The singleton pool
        """
        pool = await self.get_by(for_update=for_update, id=REWARD_POOL_ID)
        if pool is None:
            pool = await self.create(
                id=REWARD_POOL_ID,
                remaining_rewards=0,
                total_penalty=0,
                total_funded=0,
                total_paid=0,
            )
        return pool
