"""
Deposit repository.

Data access layer for Deposit model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staking.models.deposit import Deposit
from staking.repositories.base import BaseRepository


class DepositRepository(BaseRepository[Deposit]):
    """Deposit repository with per-account queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize deposit repository."""
        super().__init__(Deposit, session)

    async def get_by_account_index(
        self, account: str, index: int, for_update: bool = False
    ) -> Deposit | None:
        """
        Get deposit by its owner and per-account index.

        Args:
            account: Owning account
            index: Zero-based deposit index
            for_update: Lock the row for the current transaction

        Returns:
            Deposit or None
        """
        return await self.get_by(
            for_update=for_update, account=account, deposit_index=index
        )

    async def get_by_account(self, account: str) -> list[Deposit]:
        """
        Get all deposits of an account in creation order.

        Args:
            account: Owning account

        Returns:
            List of deposits, closed ones included
        """
        stmt = (
            select(Deposit)
            .where(Deposit.account == account)
            .order_by(Deposit.deposit_index)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_account(self, account: str) -> int:
        """
        Count deposits ever created by an account.

        Since rows are never deleted, this is also the next index.

        Args:
            account: Owning account

        Returns:
            Number of deposits
        """
        return await self.count(account=account)
