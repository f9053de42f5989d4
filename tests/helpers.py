"""Shared constants and fakes for the test suite."""

from collections import defaultdict

from staking.accrual import SECONDS_PER_DAY


OWNER = "owner"
USER = "user"
OTHER_USER = "other-user"

# Rates index-aligned with Tier: NONE, MONTH, TWO_MONTHS, YEAR, ...
TEST_REWARD_PERCENTS = [0, 5, 11, 20, 45, 80, 120, 450]
TEST_PENALTY_PERCENT = 10

START_TIME = 1_700_000_000
DAY = SECONDS_PER_DAY


def at_day(days: int, seconds: int = 0) -> int:
    """Timestamp `days` whole days after START_TIME."""
    return START_TIME + days * DAY + seconds


class TransferError(Exception):
    """Raised by the fake token ledger when a transfer cannot happen."""


class FakeTokenLedger:
    """In-memory token balances with a custody account."""

    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self.balances: defaultdict[str, int] = defaultdict(int, balances or {})
        self.custody = 0
        self.transfers: list[tuple[str, str, int]] = []
        self.fail_transfers_out = False

    async def transfer_in(self, account: str, amount: int) -> None:
        if self.balances[account] < amount:
            raise TransferError(f"{account} cannot pay {amount}")
        self.balances[account] -= amount
        self.custody += amount
        self.transfers.append(("in", account, amount))

    async def transfer_out(self, account: str, amount: int) -> None:
        if self.fail_transfers_out:
            raise TransferError("transfer out rejected")
        if self.custody < amount:
            raise TransferError(f"custody cannot pay {amount}")
        self.custody -= amount
        self.balances[account] += amount
        self.transfers.append(("out", account, amount))
