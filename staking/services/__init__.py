"""
Staking services.

Submodules:
- deposit_ledger: creation, lookup and closure of deposits
- pool_accounting: reward pool, penalties and every payout
- staking_service: facade over both
- token_ledger / access_control: external collaborator interfaces
"""

from .access_control import AccessControl, SingleOwnerAccessControl
from .base_service import BaseService, transaction
from .deposit_ledger import DepositLedger
from .pool_accounting import PoolAccounting
from .staking_service import StakingService
from .token_ledger import TokenLedger


__all__ = [
    "StakingService",
    "DepositLedger",
    "PoolAccounting",
    "BaseService",
    "transaction",
    "TokenLedger",
    "AccessControl",
    "SingleOwnerAccessControl",
]
