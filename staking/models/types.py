"""
Standard type definitions for database models.

Provides consistent types for token amounts and timestamps across all models.
"""

from typing import Any

from sqlalchemy import BigInteger, String
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

# uint256 has at most 78 decimal digits
UINT256_DIGITS = 78
UINT256_MAX = 2**256 - 1


class UIntType(TypeDecorator[int]):
    """
    Exact unsigned integer stored as decimal text.

    Numeric columns lose precision above 2**63 on SQLite, so amounts
    round-trip through strings and come back as Python ints.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        """Validate and serialize an amount."""
        if value is None:
            return None
        if isinstance(value, bool) or int(value) != value:
            raise ValueError(f"Token amount must be an integer, got {value!r}")
        value = int(value)
        if not 0 <= value <= UINT256_MAX:
            raise ValueError(f"Token amount out of uint256 range: {value}")
        return str(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> int | None:
        """Parse a stored amount."""
        if value is None:
            return None
        return int(value)


# Standard token amount type for principal, rewards, penalties
# Range: 0 to 2**256 - 1, exact on every dialect
TokenAmountType = UIntType(UINT256_DIGITS)

# Unix timestamp in whole seconds
TimestampType = BigInteger()
