"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Staking ledger settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STAKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./staking.db"
    database_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Identities
    owner_address: str = Field(
        default="owner",
        min_length=1,
        description="Only identity allowed to fund the pool and withdraw penalties",
    )
    token_address: str = Field(
        default="",
        description="Address of the staked token, informational only",
    )

    # Penalty for closing a deposit inside its nominal period
    abort_penalty_percents: int = Field(
        default=10, ge=0, le=100,
        description="Percent of principal forfeited on early exit",
    )

    # Reward percents per nominal period
    month_reward_percents: int = Field(default=5, ge=0)
    two_months_reward_percents: int = Field(default=11, ge=0)
    year_reward_percents: int = Field(default=70, ge=0)
    two_years_reward_percents: int = Field(default=150, ge=0)
    three_years_reward_percents: int = Field(default=240, ge=0)
    four_years_reward_percents: int = Field(default=340, ge=0)
    five_years_reward_percents: int = Field(default=450, ge=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level."""
        level = v.upper()
        allowed = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got {v!r}")
        return level

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Require an async SQLAlchemy driver."""
        async_drivers = ("aiosqlite", "asyncpg", "aiomysql", "asyncmy")
        scheme = v.split("://", 1)[0]
        driver = scheme.partition("+")[2]
        if driver not in async_drivers:
            raise ValueError(
                f"database_url must use an async driver (e.g. sqlite+aiosqlite), got {scheme!r}"
            )
        return v

    @property
    def reward_percents(self) -> list[int]:
        """Rate table index-aligned with Tier (index 0 is the NONE tier)."""
        return [
            0,
            self.month_reward_percents,
            self.two_months_reward_percents,
            self.year_reward_percents,
            self.two_years_reward_percents,
            self.three_years_reward_percents,
            self.four_years_reward_percents,
            self.five_years_reward_percents,
        ]


settings = Settings()
