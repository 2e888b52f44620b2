"""
Configuration management for redirect_scanner.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation. Every field can be set with a
``REDIRECT_SCANNER_`` prefixed environment variable or in a ``.env`` file;
command line flags override both.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redirect_scanner.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_NAVIGATOR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_SCHEMES,
    DEFAULT_SETTLE_DELAY,
    DEFAULT_USER_AGENT,
    NAVIGATORS,
)


class Settings(BaseSettings):
    """
    Scanner settings loaded from environment variables.

    All settings are validated at startup so a bad value fails before any
    domain is probed.
    """

    model_config = SettingsConfigDict(
        env_prefix="REDIRECT_SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Worker pool
    max_concurrency: int = Field(
        default=DEFAULT_MAX_CONCURRENCY,
        description="Maximum number of probes in flight",
    )

    # Probe timing
    probe_timeout: float = Field(
        default=DEFAULT_PROBE_TIMEOUT,
        description="Hard deadline per navigation, in seconds",
    )
    settle_delay: float = Field(
        default=DEFAULT_SETTLE_DELAY,
        description="Seconds to wait after navigation before reading the location",
    )
    schemes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SCHEMES),
        description="Schemes tried in order for inputs without one",
    )

    # Navigation engine
    navigator: str = Field(
        default=DEFAULT_NAVIGATOR,
        description="Navigation engine: 'browser' (Playwright) or 'http' (requests)",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent sent by the navigator",
    )

    # Classification
    same_site_is_safe: bool = Field(
        default=False,
        description="Treat redirects within the same registrable domain as safe",
    )

    # Output
    output_file: str = Field(
        default=DEFAULT_OUTPUT_FILE,
        description="Report destination",
    )
    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory for log files",
    )

    @field_validator("max_concurrency")
    @classmethod
    def positive_concurrency(cls, v: int) -> int:
        """Reject caps that would never let a probe run."""
        if v < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {v}")
        return v

    @field_validator("probe_timeout")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"probe_timeout must be > 0, got {v}")
        return v

    @field_validator("settle_delay")
    @classmethod
    def non_negative_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"settle_delay must be >= 0, got {v}")
        return v

    @field_validator("navigator", mode="before")
    @classmethod
    def known_navigator(cls, v: str) -> str:
        """Normalize and validate the navigator name."""
        if isinstance(v, str):
            v = v.strip().lower()
        if v not in NAVIGATORS:
            raise ValueError(f"navigator must be one of {', '.join(NAVIGATORS)}, got {v!r}")
        return v

    @field_validator("schemes")
    @classmethod
    def valid_schemes(cls, v: list[str]) -> list[str]:
        """Schemes must look like 'http://' and there must be at least one."""
        cleaned = [s.strip().lower() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError("schemes must not be empty")
        for scheme in cleaned:
            if scheme not in ("http://", "https://"):
                raise ValueError(f"unsupported scheme {scheme!r}")
        return cleaned

    @field_validator("output_file", "user_agent", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def settle_delay_within_timeout(self) -> "Settings":
        """The deadline covers the settle delay, so it must leave time to navigate."""
        if self.settle_delay >= self.probe_timeout:
            raise ValueError(
                f"settle_delay ({self.settle_delay:g}s) must be shorter than "
                f"probe_timeout ({self.probe_timeout:g}s)"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
