"""
Runtime settings for the scraping pipelines.

Defaults mirror what the source sites tolerate; every value can be
overridden from the environment (or a .env file, see env.py) and again
from the CLI.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_ROSTER_URL = "https://fantasyranker-adp-api.onrender.com/api/players"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Inter-batch pause per pipeline, milliseconds
BATCH_DELAYS_MS = {
    "gamelogs": 4000,
    "injuries": 2000,
}


@dataclass(frozen=True)
class Settings:
    batch_size: int = 5
    batch_delay_ms: int = 4000
    request_delay_ms: int = 300
    fetch_timeout_ms: int = 15000
    roster_timeout_ms: int = 60000
    retry_attempts: int = 3
    retry_delay_ms: int = 30000
    roster_url: str = DEFAULT_ROSTER_URL
    roster_limit: int = 250
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size}")
        if self.retry_attempts < 1:
            raise ValueError(f"retry_attempts must be at least 1, got {self.retry_attempts}")
        for name in ("batch_delay_ms", "request_delay_ms", "retry_delay_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for name in ("fetch_timeout_ms", "roster_timeout_ms", "roster_limit"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @classmethod
    def from_env(cls, pipeline: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            pipeline: 'gamelogs' or 'injuries'; picks the default batch delay
            environ: Mapping to read instead of os.environ

        Raises:
            ValueError: If a numeric variable is not an integer or out of range
        """
        env = os.environ if environ is None else environ
        defaults = cls(batch_delay_ms=BATCH_DELAYS_MS.get(pipeline or "", cls.batch_delay_ms))

        def _int(var: str, default: int) -> int:
            raw = env.get(var)
            if raw is None or raw.strip() == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{var} must be an integer, got {raw!r}")

        return cls(
            batch_size=_int("BATCH_SIZE", defaults.batch_size),
            batch_delay_ms=_int("BATCH_DELAY_MS", defaults.batch_delay_ms),
            request_delay_ms=_int("REQUEST_DELAY_MS", defaults.request_delay_ms),
            fetch_timeout_ms=_int("FETCH_TIMEOUT_MS", defaults.fetch_timeout_ms),
            roster_timeout_ms=_int("ROSTER_TIMEOUT_MS", defaults.roster_timeout_ms),
            retry_attempts=_int("RETRY_ATTEMPTS", defaults.retry_attempts),
            retry_delay_ms=_int("RETRY_DELAY_MS", defaults.retry_delay_ms),
            roster_url=env.get("ROSTER_URL") or defaults.roster_url,
            roster_limit=_int("ROSTER_LIMIT", defaults.roster_limit),
            user_agent=env.get("USER_AGENT") or defaults.user_agent,
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with the non-None values in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @property
    def request_delay(self) -> float:
        return self.request_delay_ms / 1000

    @property
    def batch_delay(self) -> float:
        return self.batch_delay_ms / 1000

    @property
    def retry_delay(self) -> float:
        return self.retry_delay_ms / 1000

    @property
    def fetch_timeout(self) -> float:
        return self.fetch_timeout_ms / 1000

    @property
    def roster_timeout(self) -> float:
        return self.roster_timeout_ms / 1000
