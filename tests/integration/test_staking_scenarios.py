"""
Integration tests for end-to-end staking flows.

Tests cover:
- Reward claims and the cooldown between them
- Deposit closure with and without penalty
- Claims followed by closure
- Pool exhaustion
- Error precedence
- Token conservation
"""

import pytest

from staking.accrual import Tier
from staking.utils.exceptions import (
    AlreadyClosed,
    CooldownActive,
    IndexOutOfRange,
    NoRewardsRemaining,
)
from tests.helpers import OTHER_USER, OWNER, START_TIME, USER, at_day


class TestClaims:
    """Reward claims."""

    @pytest.mark.asyncio
    async def test_claim_pays_accrued_rewards(self, staking_service, token_ledger):
        """Claim on day 40 of a Year deposit pays 21."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        paid = await staking_service.withdraw_rewards(USER, 0, at_day(40))

        assert paid == 21
        assert token_ledger.balances[USER] == 10_000_000 - 1000 + 21
        assert await staking_service.remaining_rewards_amount() == 15_000 - 21

        info = await staking_service.get_deposit_info(USER, 0, at_day(40))
        assert info.last_claim_timestamp == at_day(40)
        assert info.rewards_paid == 21
        assert info.rewards_amount == 0

    @pytest.mark.asyncio
    async def test_second_claim_counts_from_first(self, staking_service):
        """Claims on day 40 and 405 together pay the 405-day accrual."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        first = await staking_service.withdraw_rewards(USER, 0, at_day(40))
        second = await staking_service.withdraw_rewards(USER, 0, at_day(405))

        assert first == 21
        assert second == 200
        # (1000 * 405 * 20) // 36500 = 221
        assert first + second == 221

    @pytest.mark.asyncio
    async def test_month_tier_rewards(self, staking_service):
        """Month deposit of 1000 earns 66 over 40 days."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.MONTH, START_TIME)

        assert await staking_service.withdraw_rewards(USER, 0, at_day(40)) == 66

    @pytest.mark.asyncio
    async def test_claim_inside_first_week(self, staking_service):
        """Cooldown also applies from the deposit start."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        with pytest.raises(CooldownActive):
            await staking_service.withdraw_rewards(USER, 0, at_day(7) - 1)

    @pytest.mark.asyncio
    async def test_cooldown_between_claims(self, staking_service):
        """A second claim inside 7 days is rejected and changes nothing."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.withdraw_rewards(USER, 0, at_day(40))

        with pytest.raises(CooldownActive) as exc_info:
            await staking_service.withdraw_rewards(USER, 0, at_day(46))

        assert exc_info.value.reason == "Must wait cooldown since last reward claiming"
        assert await staking_service.remaining_rewards_amount() == 15_000 - 21
        info = await staking_service.get_deposit_info(USER, 0, at_day(46))
        assert info.last_claim_timestamp == at_day(40)

    @pytest.mark.asyncio
    async def test_claim_exactly_after_cooldown(self, staking_service):
        """Exactly 7 days after a claim the next one is allowed."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.withdraw_rewards(USER, 0, at_day(40))

        # (1000 * 7 * 20) // 36500 = 3
        assert await staking_service.withdraw_rewards(USER, 0, at_day(47)) == 3

    @pytest.mark.asyncio
    async def test_claim_never_exceeds_pool(self, staking_service, token_ledger):
        """A short pool pays what it has and restarts the claim clock."""
        await staking_service.add_rewards(OWNER, 10)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        paid = await staking_service.withdraw_rewards(USER, 0, at_day(40))

        assert paid == 10
        assert await staking_service.remaining_rewards_amount() == 0
        info = await staking_service.get_deposit_info(USER, 0, at_day(40))
        assert info.last_claim_timestamp == at_day(40)

        # The unpaid 11 is forfeited; accrual restarts at day 40
        await staking_service.add_rewards(OWNER, 1000)
        assert await staking_service.withdraw_rewards(USER, 0, at_day(47)) == 3

    @pytest.mark.asyncio
    async def test_claim_on_empty_pool(self, staking_service):
        """An empty pool rejects claims."""
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        with pytest.raises(NoRewardsRemaining) as exc_info:
            await staking_service.withdraw_rewards(USER, 0, at_day(40))

        assert exc_info.value.reason == "No more rewards"

    @pytest.mark.asyncio
    async def test_claim_with_nothing_accrued(self, staking_service, token_ledger):
        """A claim with zero accrual succeeds, pays nothing and moves no tokens."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 10, Tier.YEAR, START_TIME)
        transfers_before = len(token_ledger.transfers)

        # (10 * 7 * 20) // 36500 = 0
        assert await staking_service.withdraw_rewards(USER, 0, at_day(7)) == 0
        assert len(token_ledger.transfers) == transfers_before

        info = await staking_service.get_deposit_info(USER, 0, at_day(7))
        assert info.last_claim_timestamp == at_day(7)


class TestClosure:
    """Deposit closure."""

    @pytest.mark.asyncio
    async def test_close_after_nominal_period(self, staking_service, token_ledger):
        """Closing a Year deposit on day 395 returns principal plus 216."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        returned = await staking_service.withdraw_deposit(USER, 0, at_day(395))

        # (1000 * 395 * 20) // 36500 = 216
        assert returned == 1216
        assert token_ledger.balances[USER] == 10_000_000 + 216
        assert await staking_service.total_penalty() == 0

        info = await staking_service.get_deposit_info(USER, 0, at_day(395))
        assert info.closed is True
        assert info.rewards_paid == 216

    @pytest.mark.asyncio
    async def test_early_close_pays_penalty(self, staking_service, token_ledger):
        """Closing on day 30 returns 1000 + 16 - 100."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        returned = await staking_service.withdraw_deposit(USER, 0, at_day(30))

        assert returned == 916
        assert await staking_service.total_penalty() == 100
        assert await staking_service.remaining_rewards_amount() == 15_000 - 16

        info = await staking_service.get_deposit_info(USER, 0, at_day(30))
        assert info.penalty_paid == 100
        assert info.closed_at == at_day(30)
        assert info.rewards_paid == 16

    @pytest.mark.asyncio
    async def test_open_deposit_has_no_closure_audit(self, staking_service):
        """An open deposit reports no closure time and no penalty."""
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        info = await staking_service.get_deposit_info(USER, 0, at_day(30))

        assert info.closed_at is None
        assert info.penalty_paid == 0

    @pytest.mark.asyncio
    async def test_close_exactly_at_nominal_period(self, staking_service):
        """Closing exactly at the end of the nominal period is not penalized."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.MONTH, START_TIME)

        returned = await staking_service.withdraw_deposit(USER, 0, at_day(30))

        # (1000 * 30 * 5) // 3000 = 50
        assert returned == 1050
        assert await staking_service.total_penalty() == 0

    @pytest.mark.asyncio
    async def test_close_on_empty_pool(self, staking_service, token_ledger):
        """An empty pool never blocks closure; principal comes back."""
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        returned = await staking_service.withdraw_deposit(USER, 0, at_day(30))

        assert returned == 900
        assert token_ledger.balances[USER] == 10_000_000 - 100
        assert await staking_service.total_penalty() == 100

    @pytest.mark.asyncio
    async def test_close_twice(self, staking_service):
        """A closed deposit cannot be closed again."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.withdraw_deposit(USER, 0, at_day(30))

        with pytest.raises(AlreadyClosed):
            await staking_service.withdraw_deposit(USER, 0, at_day(31))

        assert await staking_service.total_penalty() == 100

    @pytest.mark.asyncio
    async def test_claim_after_close(self, staking_service):
        """A closed deposit cannot be claimed."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.withdraw_deposit(USER, 0, at_day(30))

        with pytest.raises(AlreadyClosed):
            await staking_service.withdraw_rewards(USER, 0, at_day(60))

    @pytest.mark.asyncio
    async def test_closed_deposit_keeps_its_index(self, staking_service):
        """Closure never frees an index; new deposits append."""
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.withdraw_deposit(USER, 0, at_day(30))

        index = await staking_service.create_deposit(USER, 500, Tier.MONTH, at_day(31))

        assert index == 1
        assert await staking_service.get_deposit_indices(USER) == 2


class TestClaimThenClose:
    """Closure after earlier claims."""

    @pytest.mark.asyncio
    async def test_closure_counts_from_start(self, staking_service, token_ledger):
        """Closure pays full-period rewards even after a claim."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        claimed = await staking_service.withdraw_rewards(USER, 0, at_day(40))
        returned = await staking_service.withdraw_deposit(USER, 0, at_day(100))

        # (1000 * 100 * 20) // 36500 = 54 counted from the start, minus 100 penalty
        assert claimed == 21
        assert returned == 954
        info = await staking_service.get_deposit_info(USER, 0, at_day(100))
        assert info.rewards_paid == 75
        assert await staking_service.remaining_rewards_amount() == 15_000 - 75

    @pytest.mark.asyncio
    async def test_closure_without_claims(self, staking_service):
        """Closing on day 100 without claims pays 54 in total."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        returned = await staking_service.withdraw_deposit(USER, 0, at_day(100))

        assert returned == 954
        info = await staking_service.get_deposit_info(USER, 0, at_day(100))
        assert info.rewards_paid == 54


class TestPoolExhaustion:
    """Deposits competing for a finite pool."""

    @pytest.mark.asyncio
    async def test_pool_runs_dry(self, staking_service, token_ledger):
        """A Five-year deposit drains a 15000 pool and later claims fail."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 10_000, Tier.FIVE_YEARS, START_TIME)

        # Owed (10000 * 730 * 450) // 182500 = 18000, capped at 15000
        paid = await staking_service.withdraw_rewards(USER, 0, at_day(730))

        assert paid == 15_000
        assert await staking_service.remaining_rewards_amount() == 0

        info = await staking_service.get_deposit_info(USER, 0, at_day(1095))
        assert info.rewards_amount == 0

        with pytest.raises(NoRewardsRemaining):
            await staking_service.withdraw_rewards(USER, 0, at_day(1095))

        returned = await staking_service.withdraw_deposit(USER, 0, at_day(1825))
        assert returned == 10_000

    @pytest.mark.asyncio
    async def test_first_claimer_wins(self, staking_service):
        """Rewards are paid first come, first served."""
        await staking_service.add_rewards(OWNER, 100)
        await staking_service.create_deposit(USER, 1000, Tier.MONTH, START_TIME)
        await staking_service.create_deposit(OTHER_USER, 1000, Tier.MONTH, START_TIME)

        # Each is owed (1000 * 60 * 5) // 3000 = 100
        assert await staking_service.withdraw_rewards(USER, 0, at_day(60)) == 100

        with pytest.raises(NoRewardsRemaining):
            await staking_service.withdraw_rewards(OTHER_USER, 0, at_day(60))


class TestErrorPrecedence:
    """Which error wins when several apply."""

    @pytest.mark.asyncio
    async def test_index_checked_first(self, staking_service):
        """Unknown index wins over an empty pool."""
        with pytest.raises(IndexOutOfRange):
            await staking_service.withdraw_rewards(USER, 0, at_day(40))

    @pytest.mark.asyncio
    async def test_closed_before_cooldown(self, staking_service):
        """A closed deposit reports closure even inside the cooldown."""
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.withdraw_deposit(USER, 0, at_day(1))

        with pytest.raises(AlreadyClosed):
            await staking_service.withdraw_rewards(USER, 0, at_day(2))

    @pytest.mark.asyncio
    async def test_cooldown_before_empty_pool(self, staking_service):
        """Cooldown wins over an empty pool."""
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)

        with pytest.raises(CooldownActive):
            await staking_service.withdraw_rewards(USER, 0, at_day(3))


class TestConservation:
    """Token accounting across a mixed history."""

    @pytest.mark.asyncio
    async def test_custody_matches_ledger(self, staking_service, token_ledger):
        """Custody equals pool rewards plus penalties plus open principal."""
        await staking_service.add_rewards(OWNER, 15_000)
        await staking_service.create_deposit(USER, 1000, Tier.YEAR, START_TIME)
        await staking_service.create_deposit(USER, 2000, Tier.MONTH, START_TIME)
        await staking_service.create_deposit(OTHER_USER, 5000, Tier.FIVE_YEARS, START_TIME)

        await staking_service.withdraw_rewards(USER, 0, at_day(40))
        await staking_service.withdraw_deposit(USER, 1, at_day(20))
        await staking_service.withdraw_deposit(OTHER_USER, 0, at_day(1825))

        open_principal = 0
        for account in (USER, OTHER_USER):
            deposits = await staking_service.get_deposits(account, at_day(1825))
            open_principal += sum(d.amount for d in deposits if not d.closed)
        pool = await staking_service.get_pool_info()

        assert open_principal == 1000
        assert pool.total_penalty == 200
        assert pool.remaining_rewards == 0
        assert token_ledger.custody == (
            pool.remaining_rewards + pool.total_penalty + open_principal
        )
