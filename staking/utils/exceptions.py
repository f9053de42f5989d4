"""
Exception handling utilities.

Defines the staking error taxonomy. Every error is a precondition
failure raised before any state mutation; the surrounding transaction
is rolled back and the error is surfaced to the caller unchanged.
"""


class StakingError(Exception):
    """Base class for all staking ledger errors."""

    default_reason = "Staking operation rejected"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class InvalidAmount(StakingError):
    """Raised when an amount is zero (for deposits) or negative."""

    default_reason = "Invalid amount"


class InvalidTier(StakingError):
    """Raised when a tier is None or outside the configured table."""

    default_reason = "Invalid staking period"


class IndexOutOfRange(StakingError):
    """Raised when an account has no deposit at the requested index."""

    default_reason = "Deposit index out of range"


class CooldownActive(StakingError):
    """Raised when rewards are claimed before the cooldown has elapsed."""

    default_reason = "Must wait cooldown since last reward claiming"


class NoRewardsRemaining(StakingError):
    """Raised when a claim hits a fully exhausted reward pool."""

    default_reason = "No more rewards"


class AlreadyClosed(StakingError):
    """Raised when a closed deposit is claimed or closed again."""

    default_reason = "Deposit already closed"


class NotOwner(StakingError):
    """Raised when an owner-only operation is called by someone else."""

    default_reason = "Ownable: caller is not the owner"


class InsufficientPenaltyBalance(StakingError):
    """Raised when more penalty is withdrawn than has been collected."""

    default_reason = "Insufficient penalty amount"


# Exception categories based on handling strategy

# Caller mistakes - rejected before any mutation, never retried
PRECONDITION_ERRORS = (
    InvalidAmount,
    InvalidTier,
    IndexOutOfRange,
    CooldownActive,
    NoRewardsRemaining,
    AlreadyClosed,
)

# Access control failures
ACCESS_ERRORS = (
    NotOwner,
)


def is_precondition_error(exc: Exception) -> bool:
    """
    Check if exception is an ordinary precondition rejection.

    Args:
        exc: Exception to check

    Returns:
        True if the caller simply asked for something not allowed now
    """
    return isinstance(exc, PRECONDITION_ERRORS + (InsufficientPenaltyBalance,))


def is_access_error(exc: Exception) -> bool:
    """
    Check if exception is an access control failure.

    Args:
        exc: Exception to check

    Returns:
        True if the caller lacked the required identity
    """
    return isinstance(exc, ACCESS_ERRORS)
