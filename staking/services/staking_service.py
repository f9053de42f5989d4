"""
Staking service.

Facade exposing the whole observable surface of the staking ledger
over one database session.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from staking.accrual import DepositInfo, PoolInfo, Tier, TierTable
from staking.config.settings import Settings, settings as default_settings
from staking.config.tiers import build_tier_table
from staking.services.access_control import AccessControl, SingleOwnerAccessControl
from staking.services.deposit_ledger import DepositLedger
from staking.services.pool_accounting import PoolAccounting
from staking.services.token_ledger import TokenLedger


class StakingService:
    """Staking ledger facade: deposits, claims, closures and the pool."""

    def __init__(
        self,
        session: AsyncSession,
        token_ledger: TokenLedger,
        tier_table: TierTable | None = None,
        access_control: AccessControl | None = None,
        config: Settings | None = None,
    ) -> None:
        """
        Initialize staking service.

        Args:
            session: Async database session
            token_ledger: Custody collaborator
            tier_table: Tier configuration; built from settings when omitted
            access_control: Owner gate; single owner from settings when omitted
            config: Settings to read defaults from
        """
        self.config = config or default_settings
        self.tier_table = tier_table or build_tier_table(self.config)
        self.access_control = access_control or SingleOwnerAccessControl(
            self.config.owner_address
        )
        self.deposits = DepositLedger(session, self.tier_table, token_ledger)
        self.pool = PoolAccounting(
            session,
            self.tier_table,
            token_ledger,
            self.access_control,
            deposit_ledger=self.deposits,
        )

    # Deposits

    async def create_deposit(
        self, account: str, amount: int, tier: int | Tier, now: int | None = None
    ) -> int:
        """Open a deposit; returns its index."""
        return await self.deposits.create_deposit(account, amount, tier, now)

    async def get_deposit_info(
        self, account: str, index: int, now: int | None = None
    ) -> DepositInfo:
        """Deposit snapshot with pool-capped claimable rewards."""
        return await self.deposits.get_deposit_info(account, index, now)

    async def get_deposit_indices(self, account: str) -> int:
        """Number of deposits ever created by an account."""
        return await self.deposits.get_deposit_count(account)

    async def get_deposits(
        self, account: str, now: int | None = None
    ) -> list[DepositInfo]:
        """Full deposit history of an account."""
        return await self.deposits.get_deposits(account, now)

    # Claims and closure

    async def withdraw_rewards(
        self, account: str, index: int, now: int | None = None
    ) -> int:
        """Claim accrued rewards; returns the amount paid."""
        return await self.pool.withdraw_rewards(account, index, now)

    async def withdraw_deposit(
        self, account: str, index: int, now: int | None = None
    ) -> int:
        """Close a deposit; returns principal plus rewards minus penalty."""
        return await self.pool.withdraw_deposit(account, index, now)

    # Owner operations

    async def add_rewards(self, caller: str, amount: int) -> None:
        """Fund the reward pool (owner only)."""
        await self.pool.add_rewards(caller, amount)

    async def withdraw_penalty(self, caller: str, amount: int) -> None:
        """Withdraw collected penalties (owner only)."""
        await self.pool.withdraw_penalty(caller, amount)

    # Read-only accessors

    async def remaining_rewards_amount(self) -> int:
        """Fundable rewards not yet paid."""
        return await self.pool.remaining_rewards_amount()

    async def total_penalty(self) -> int:
        """Collected penalties available to the owner."""
        return await self.pool.total_penalty_amount()

    async def get_pool_info(self) -> PoolInfo:
        """All pool balances and audit counters."""
        return await self.pool.get_pool_info()

    def staking_reward_percents(self, index: int) -> int:
        """Configured reward rate at a tier index."""
        return self.tier_table.reward_rate_percent(index)

    @property
    def abort_staking_penalty_percents(self) -> int:
        """Early-exit penalty percent."""
        return self.tier_table.penalty_percent

    @property
    def token(self) -> str:
        """Address of the staked token."""
        return self.config.token_address
