"""
Pool accounting.

Sole writer of the reward pool. Every payout path goes through the
pool cap here, so total payouts can never exceed what was funded.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from staking.accrual import DepositSnapshot, PoolInfo, RewardAccrualEngine, TierTable
from staking.models.reward_pool import RewardPool
from staking.models.types import UINT256_MAX
from staking.repositories.reward_pool_repository import RewardPoolRepository
from staking.services.access_control import AccessControl
from staking.services.base_service import BaseService, transaction
from staking.services.deposit_ledger import DepositLedger
from staking.services.token_ledger import TokenLedger
from staking.utils.datetime_utils import resolve_now
from staking.utils.exceptions import (
    InsufficientPenaltyBalance,
    InvalidAmount,
    NoRewardsRemaining,
)


def _ensure_unsigned(amount: int) -> None:
    """Reject anything that is not a uint256."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmount(f"Amount must be a non-negative integer, got {amount!r}")
    if amount > UINT256_MAX:
        raise InvalidAmount(f"Amount exceeds uint256: {amount}")


class PoolAccounting(BaseService):
    """Remaining rewards, collected penalties and every payout."""

    def __init__(
        self,
        session: AsyncSession,
        tier_table: TierTable,
        token_ledger: TokenLedger,
        access_control: AccessControl,
        deposit_ledger: DepositLedger | None = None,
    ) -> None:
        """
        Initialize pool accounting.

        Args:
            session: Async database session
            tier_table: Immutable tier configuration
            token_ledger: Custody collaborator moving funds
            access_control: Owner gate for funding and penalty withdrawal
            deposit_ledger: Deposit ledger sharing the same session
        """
        super().__init__(session)
        self.engine = RewardAccrualEngine(tier_table)
        self.token_ledger = token_ledger
        self.access_control = access_control
        self.deposit_ledger = deposit_ledger or DepositLedger(
            session, tier_table, token_ledger
        )
        self.pool_repo = RewardPoolRepository(session)

    @transaction
    async def add_rewards(self, caller: str, amount: int) -> None:
        """
        Fund the reward pool.

        Args:
            caller: Must be the owner
            amount: Rewards to add

        Raises:
            NotOwner: If caller is not the owner
            InvalidAmount: If amount is negative or the pool would overflow uint256
        """
        self.access_control.ensure_owner(caller)
        _ensure_unsigned(amount)

        pool = await self.pool_repo.get_pool(for_update=True)
        if max(pool.remaining_rewards, pool.total_funded) + amount > UINT256_MAX:
            raise InvalidAmount("Reward pool would exceed uint256")

        pool.remaining_rewards = pool.remaining_rewards + amount
        pool.total_funded = pool.total_funded + amount
        await self.session.flush()

        await self.token_ledger.transfer_in(caller, amount)

        self.logger.info(
            f"Rewards added: amount={amount}, remaining={pool.remaining_rewards}"
        )

    @transaction
    async def withdraw_rewards(
        self, account: str, index: int, now: int | None = None
    ) -> int:
        """
        Claim rewards accrued since the last claim.

        Pays at most what the pool holds. The claim clock restarts even
        when the payout is short; the unpaid excess is forfeited.

        Args:
            account: Owning account
            index: Deposit index
            now: Current unix timestamp

        Returns:
            Amount paid

        Raises:
            IndexOutOfRange: If the account has no deposit at index
            AlreadyClosed: If the deposit was closed
            CooldownActive: If the last claim was less than 7 days ago
            NoRewardsRemaining: If the pool is empty
        """
        now = resolve_now(now)
        deposit = await self.deposit_ledger.get_open_deposit(account, index)
        snapshot = DepositSnapshot.model_validate(deposit)

        self.engine.ensure_cooldown_elapsed(snapshot, now)

        pool = await self.pool_repo.get_pool(for_update=True)
        if pool.remaining_rewards == 0:
            raise NoRewardsRemaining()

        owed = self.engine.claimable_rewards(snapshot, now)
        payout = self.engine.cap_payout(owed, pool.remaining_rewards)

        self._pay_from_pool(pool, payout)
        await self.deposit_ledger.mark_claimed(account, index, now, payout)

        if payout > 0:
            await self.token_ledger.transfer_out(account, payout)

        if payout < owed:
            self.logger.warning(
                f"Short-paid claim: account={account}, index={index}, "
                f"owed={owed}, paid={payout}"
            )
        self.logger.info(
            f"Rewards withdrawn: account={account}, index={index}, "
            f"paid={payout}, remaining={pool.remaining_rewards}"
        )
        return payout

    @transaction
    async def withdraw_deposit(
        self, account: str, index: int, now: int | None = None
    ) -> int:
        """
        Close a deposit, returning principal plus rewards minus penalty.

        Rewards count from the deposit start, not from the last claim.
        A penalty applies when closing inside the tier's nominal period.
        An empty pool never blocks closure; the principal always returns.

        Args:
            account: Owning account
            index: Deposit index
            now: Current unix timestamp

        Returns:
            Amount transferred to the account

        Raises:
            IndexOutOfRange: If the account has no deposit at index
            AlreadyClosed: If the deposit was closed
        """
        now = resolve_now(now)
        deposit = await self.deposit_ledger.get_open_deposit(account, index)
        snapshot = DepositSnapshot.model_validate(deposit)

        pool = await self.pool_repo.get_pool(for_update=True)
        owed = self.engine.closing_rewards(snapshot, now)
        payout = self.engine.cap_payout(owed, pool.remaining_rewards)

        penalty = 0
        if self.engine.is_early_withdrawal(snapshot, now):
            penalty = self.engine.calculate_penalty(snapshot.amount)

        self._pay_from_pool(pool, payout)
        pool.total_penalty = pool.total_penalty + penalty
        await self.session.flush()

        await self.deposit_ledger.mark_closed(account, index, now, payout, penalty)

        returned = snapshot.amount + payout - penalty
        if returned > 0:
            await self.token_ledger.transfer_out(account, returned)

        self.logger.info(
            f"Deposit closed: account={account}, index={index}, "
            f"principal={snapshot.amount}, rewards={payout}, "
            f"penalty={penalty}, returned={returned}"
        )
        return returned

    @transaction
    async def withdraw_penalty(self, caller: str, amount: int) -> None:
        """
        Withdraw collected penalties to the owner.

        Args:
            caller: Must be the owner
            amount: Amount to withdraw

        Raises:
            NotOwner: If caller is not the owner
            InvalidAmount: If amount is negative
            InsufficientPenaltyBalance: If amount exceeds collected penalties
        """
        self.access_control.ensure_owner(caller)
        _ensure_unsigned(amount)

        pool = await self.pool_repo.get_pool(for_update=True)
        if amount > pool.total_penalty:
            raise InsufficientPenaltyBalance()

        pool.total_penalty = pool.total_penalty - amount
        await self.session.flush()

        if amount > 0:
            await self.token_ledger.transfer_out(caller, amount)

        self.logger.info(
            f"Penalty withdrawn: amount={amount}, left={pool.total_penalty}"
        )

    async def remaining_rewards_amount(self) -> int:
        """Fundable rewards not yet paid."""
        pool = await self.pool_repo.get_pool()
        return pool.remaining_rewards

    async def total_penalty_amount(self) -> int:
        """Collected penalties available to the owner."""
        pool = await self.pool_repo.get_pool()
        return pool.total_penalty

    async def get_pool_info(self) -> PoolInfo:
        """Snapshot of all pool balances and audit counters."""
        pool = await self.pool_repo.get_pool()
        return PoolInfo.model_validate(pool)

    @staticmethod
    def _pay_from_pool(pool: RewardPool, payout: int) -> None:
        """Move a capped payout out of the pool balance."""
        if payout > pool.remaining_rewards:
            raise ValueError(
                f"Payout {payout} exceeds remaining rewards {pool.remaining_rewards}"
            )
        pool.remaining_rewards = pool.remaining_rewards - payout
        pool.total_paid = pool.total_paid + payout
