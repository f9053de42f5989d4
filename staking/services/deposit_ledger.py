"""
Deposit ledger.

Owns creation, lookup, claim stamping and closure of deposits. Each
account has an append-only sequence of deposits addressed by a
zero-based index; closing a deposit only flips a flag.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from staking.accrual import (
    DepositInfo,
    DepositSnapshot,
    RewardAccrualEngine,
    Tier,
    TierTable,
)
from staking.models.deposit import Deposit
from staking.models.types import UINT256_MAX
from staking.repositories.deposit_repository import DepositRepository
from staking.repositories.reward_pool_repository import RewardPoolRepository
from staking.services.base_service import BaseService, transaction
from staking.services.token_ledger import TokenLedger
from staking.utils.datetime_utils import resolve_now
from staking.utils.exceptions import (
    AlreadyClosed,
    IndexOutOfRange,
    InvalidAmount,
    InvalidTier,
)


class DepositLedger(BaseService):
    """Per-account deposit records."""

    def __init__(
        self,
        session: AsyncSession,
        tier_table: TierTable,
        token_ledger: TokenLedger,
    ) -> None:
        """
        Initialize deposit ledger.

        Args:
            session: Async database session
            tier_table: Immutable tier configuration
            token_ledger: Custody collaborator pulling deposited principal
        """
        super().__init__(session)
        self.tier_table = tier_table
        self.engine = RewardAccrualEngine(tier_table)
        self.token_ledger = token_ledger
        self.deposit_repo = DepositRepository(session)
        self.pool_repo = RewardPoolRepository(session)

    @transaction
    async def create_deposit(
        self,
        account: str,
        amount: int,
        tier: int | Tier,
        now: int | None = None,
    ) -> int:
        """
        Lock `amount` for `tier` and open a new deposit.

        Args:
            account: Depositing account
            amount: Principal, must be positive
            tier: Any tier except NONE
            now: Current unix timestamp

        Returns:
            Zero-based index of the new deposit

        Raises:
            InvalidAmount: If amount is not positive or exceeds uint256
            InvalidTier: If tier is NONE or out of range
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmount("Deposit amount must be a positive integer")
        if amount > UINT256_MAX:
            raise InvalidAmount(f"Deposit amount exceeds uint256: {amount}")

        staking_tier = self.tier_table.resolve(tier)
        if not staking_tier.is_selectable:
            raise InvalidTier(f"Staking period {staking_tier.name} is not selectable")

        now = resolve_now(now)
        index = await self.deposit_repo.count_by_account(account)

        await self.deposit_repo.create(
            account=account,
            deposit_index=index,
            amount=amount,
            tier=int(staking_tier),
            start_time=now,
            last_claim_timestamp=now,
            closed=False,
            rewards_paid=0,
            penalty_paid=0,
        )

        await self.token_ledger.transfer_in(account, amount)

        self.logger.info(
            f"Deposit created: account={account}, index={index}, "
            f"amount={amount}, tier={staking_tier.name}"
        )
        return index

    async def get_deposit(
        self, account: str, index: int, for_update: bool = False
    ) -> Deposit:
        """
        Load one deposit of an account.

        Raises:
            IndexOutOfRange: If the account has no deposit at index
        """
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise IndexOutOfRange(f"Deposit index out of range: {index!r}")

        deposit = await self.deposit_repo.get_by_account_index(
            account, index, for_update=for_update
        )
        if deposit is None:
            raise IndexOutOfRange(
                f"Account {account} has no deposit at index {index}"
            )
        return deposit

    async def get_open_deposit(
        self, account: str, index: int
    ) -> Deposit:
        """
        Load a deposit that can still be claimed or closed.

        Raises:
            IndexOutOfRange: If the account has no deposit at index
            AlreadyClosed: If the deposit was closed
        """
        deposit = await self.get_deposit(account, index, for_update=True)
        if deposit.closed:
            raise AlreadyClosed(
                f"Deposit {index} of account {account} is already closed"
            )
        return deposit

    async def get_deposit_info(
        self, account: str, index: int, now: int | None = None
    ) -> DepositInfo:
        """
        Snapshot of a deposit with the rewards a claim would pay now.

        The reported rewards are capped by the pool's remaining rewards;
        closed deposits report zero.

        Raises:
            IndexOutOfRange: If the account has no deposit at index
        """
        deposit = await self.get_deposit(account, index)
        pool = await self.pool_repo.get_pool()
        return self._to_info(deposit, pool.remaining_rewards, resolve_now(now))

    async def get_deposits(
        self, account: str, now: int | None = None
    ) -> list[DepositInfo]:
        """Full deposit history of an account, in index order."""
        now = resolve_now(now)
        deposits = await self.deposit_repo.get_by_account(account)
        pool = await self.pool_repo.get_pool()
        return [
            self._to_info(deposit, pool.remaining_rewards, now)
            for deposit in deposits
        ]

    async def get_deposit_count(self, account: str) -> int:
        """Number of deposits ever created by an account, closed ones included."""
        return await self.deposit_repo.count_by_account(account)

    async def mark_claimed(
        self, account: str, index: int, now: int, paid: int
    ) -> Deposit:
        """
        Restart the accrual clock of a deposit after a claim.

        Args:
            account: Owning account
            index: Deposit index
            now: Claim timestamp
            paid: Amount actually paid by the claim

        Returns:
            Updated deposit
        """
        deposit = await self.get_open_deposit(account, index)
        deposit.last_claim_timestamp = max(now, deposit.last_claim_timestamp)
        deposit.rewards_paid = deposit.rewards_paid + paid
        await self.session.flush()
        return deposit

    async def mark_closed(
        self, account: str, index: int, now: int, paid: int, penalty: int
    ) -> Deposit:
        """
        Close a deposit. A closed deposit is never modified again.

        Args:
            account: Owning account
            index: Deposit index
            now: Closure timestamp
            paid: Rewards paid on closure
            penalty: Penalty withheld from the principal

        Returns:
            Updated deposit
        """
        deposit = await self.get_open_deposit(account, index)
        deposit.closed = True
        deposit.closed_at = now
        deposit.rewards_paid = deposit.rewards_paid + paid
        deposit.penalty_paid = penalty
        await self.session.flush()
        return deposit

    def _to_info(
        self, deposit: Deposit, remaining_rewards: int, now: int
    ) -> DepositInfo:
        """Build the public snapshot of a deposit row."""
        snapshot = DepositSnapshot.model_validate(deposit)
        rewards_amount = 0
        if not deposit.closed:
            rewards_amount = self.engine.cap_payout(
                self.engine.claimable_rewards(snapshot, now), remaining_rewards
            )

        return DepositInfo(
            **snapshot.model_dump(),
            account=deposit.account,
            index=deposit.deposit_index,
            rewards_paid=deposit.rewards_paid,
            penalty_paid=deposit.penalty_paid,
            closed_at=deposit.closed_at,
            rewards_amount=rewards_amount,
        )
