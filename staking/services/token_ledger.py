"""
Token ledger interface.

The staking ledger never holds balances itself: value moves into and
out of custody through this collaborator, inside the same transaction
as the ledger update.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenLedger(Protocol):
    """Fungible balance ledger moving value into and out of custody."""

    async def transfer_in(self, account: str, amount: int) -> None:
        """
        Pull `amount` from `account` into custody.

        Raises:
            Exception: If the transfer fails; the staking operation is rolled back
        """
        ...

    async def transfer_out(self, account: str, amount: int) -> None:
        """
        Push `amount` from custody to `account`.

        Raises:
            Exception: If the transfer fails; the staking operation is rolled back
        """
        ...
