"""Run configuration for tcping."""

import os
from dataclasses import dataclass

from tcping.errors import ConfigError
from tcping.models import Continuous, Count, RunMode

DEFAULT_COUNT = 4
DEFAULT_INTERVAL_MS = 1000
DEFAULT_TIMEOUT_S = 4


def _env_int(name: str, default: int) -> int:
    """Read an integer override from the environment."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"Invalid {name}: {raw!r} is not an integer.") from None


@dataclass
class RunConfig:
    target: str
    continuous: bool = False
    count: int = DEFAULT_COUNT
    interval_ms: int = DEFAULT_INTERVAL_MS
    timeout_s: int = DEFAULT_TIMEOUT_S
    color: bool = True

    @classmethod
    def defaults_from_env(cls) -> dict:
        """Default interval and timeout, honouring TCPING_INTERVAL_MS and TCPING_TIMEOUT_S."""
        return {
            "interval_ms": _env_int("TCPING_INTERVAL_MS", DEFAULT_INTERVAL_MS),
            "timeout_s": _env_int("TCPING_TIMEOUT_S", DEFAULT_TIMEOUT_S),
        }

    @property
    def mode(self) -> RunMode:
        if self.continuous:
            return Continuous()
        return Count(self.count)

    def validate(self) -> "RunConfig":
        """Reject values the scheduler cannot run with."""
        if not self.target or not self.target.strip():
            raise ConfigError("Target cannot be empty.")
        if self.count < 0:
            raise ConfigError("Invalid count: must not be negative.")
        if self.interval_ms <= 0:
            raise ConfigError("Invalid interval: must be a positive number of milliseconds.")
        if self.timeout_s <= 0:
            raise ConfigError("Invalid timeout: must be a positive number of seconds.")
        return self
