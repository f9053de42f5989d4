"""
Logging setup.

Configures loguru logger for the staking ledger.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> list[int]:
    """
    Configure logger with stderr output and optional file rotation.

    Args:
        level: Minimum log level
        log_file: Optional path of a rotated log file

    Returns:
        Ids of the installed handlers
    """
    logger.remove()
    handler_ids = [logger.add(sys.stderr, level=level)]

    if log_file:
        handler_ids.append(
            logger.add(
                log_file,
                rotation="1 day",
                retention="7 days",
                level=level,
                encoding="utf-8",
            )
        )

    logger.info("Staking ledger logging configured")
    return handler_ids
