"""Agent configuration for scrapperbot."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import Any

from scrapperbot._constants import DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT, DEFAULT_QUEUE_CAPACITY
from scrapperbot.exceptions import ScrapperConfigError

DEFAULT_STRATEGY = "rush"


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ScrapperConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class AgentConfig:
    """Agent configuration.

    Parameters
    ----------
    host : str
        Game server host name.
    port : int
        TCP port the Scrappers game is listening on.
    strategy : str
        Registered strategy name (``"rush"``, ``"column"`` or ``"dish"``).
    queue_capacity : int
        Maximum number of inbound events buffered between the socket
        reader and the state processor before the reader blocks.
    seed : int or None
        Seed for strategies that use randomness.  ``None`` seeds from
        the system.
    log_level : str
        Root logging level name, e.g. ``"INFO"`` or ``"DEBUG"``.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    strategy: str = DEFAULT_STRATEGY
    queue_capacity: int = DEFAULT_QUEUE_CAPACITY
    seed: int | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> AgentConfig:
        """Check field ranges; returns ``self`` so calls can be chained."""
        # Imported here to keep config free of the strategy package at import time.
        from scrapperbot.strategies import available_strategies

        if not 0 < self.port < 65536:
            raise ScrapperConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.queue_capacity <= 0:
            raise ScrapperConfigError(f"queue_capacity must be positive, got {self.queue_capacity}")
        if not self.host.strip():
            raise ScrapperConfigError("host must be non-empty")
        if self.log_level not in logging.getLevelNamesMapping():
            raise ScrapperConfigError(f"unknown log level {self.log_level!r}")
        names = available_strategies()
        if self.strategy not in names:
            raise ScrapperConfigError(f"unknown strategy {self.strategy!r}, expected one of {', '.join(names)}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> AgentConfig:
        """Create configuration from environment variables.

        Reads ``SCRAPPERS_HOST``, ``SCRAPPERS_PORT``, ``SCRAPPERS_STRATEGY``,
        ``SCRAPPERS_QUEUE_CAPACITY``, ``SCRAPPERS_SEED`` and
        ``SCRAPPERS_LOG_LEVEL``. Explicit
        keyword arguments override environment values; ``None``
        overrides are ignored so unset CLI options fall through.
        """
        env = os.environ
        overrides = {key: value for key, value in overrides.items() if value is not None}
        config_kwargs: dict[str, Any] = {}

        host = env.get("SCRAPPERS_HOST")
        if host is not None:
            config_kwargs["host"] = host.strip()

        strategy = env.get("SCRAPPERS_STRATEGY")
        if strategy is not None:
            config_kwargs["strategy"] = strategy.strip().lower()

        log_level = env.get("SCRAPPERS_LOG_LEVEL")
        if log_level is not None:
            config_kwargs["log_level"] = log_level.strip().upper()

        _ENV_INT_MAP = {
            "SCRAPPERS_PORT": "port",
            "SCRAPPERS_QUEUE_CAPACITY": "queue_capacity",
            "SCRAPPERS_SEED": "seed",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
