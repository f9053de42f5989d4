"""
Access control for owner-only operations.
"""

from typing import Protocol

from staking.utils.exceptions import NotOwner


class AccessControl(Protocol):
    """Gate deciding who may call owner-only operations."""

    def ensure_owner(self, caller: str) -> None:
        """Raise NotOwner unless `caller` is the owner."""
        ...


class SingleOwnerAccessControl:
    """One distinguished owner identity, fixed at construction."""

    def __init__(self, owner: str) -> None:
        """
        Initialize access control.

        Args:
            owner: Owner identity

        Raises:
            ValueError: If owner is empty
        """
        if not owner:
            raise ValueError("Owner identity must not be empty")
        self.owner = owner

    def ensure_owner(self, caller: str) -> None:
        """
        Check that caller is the owner.

        Raises:
            NotOwner: If caller is anyone else
        """
        if caller != self.owner:
            raise NotOwner()
