"""
Base service class.

Provides common functionality for all service classes including session
management, logging, and the transaction decorator that makes every
ledger operation all-or-nothing.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from staking.utils.exceptions import is_access_error, is_precondition_error


# Type variable for generic decorator return types
T = TypeVar("T")


class BaseService:
    """
    Base service class.

    Provides common functionality for all service classes:
    - Session management
    - Logging with bound service context
    - Transaction helpers
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
        """
        self.session = session
        self.logger = logger.bind(service=self.__class__.__name__)

    async def commit(self) -> None:
        """
        Commit current transaction.

        Raises:
            Exception: If commit fails
        """
        await self.session.commit()

    async def rollback(self) -> None:
        """
        Rollback current transaction.

        Raises:
            Exception: If rollback fails
        """
        await self.session.rollback()


def transaction(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Decorator to wrap method in transaction with automatic commit/rollback.

    Commits on success, rolls back on exception. Rejected preconditions
    are logged as warnings, anything else as errors with traceback.

    Usage:
        @transaction
        async def withdraw_rewards(self, ...):
            ...

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        try:
            result = await func(self, *args, **kwargs)
            await self.commit()
            return result
        except Exception as e:
            await self.rollback()
            if is_precondition_error(e) or is_access_error(e):
                self.logger.warning(
                    f"{func.__name__} rejected: {type(e).__name__}: {e}"
                )
            else:
                self.logger.opt(exception=e).error(
                    f"Transaction failed in {func.__name__}: {e}"
                )
            raise

    return wrapper
