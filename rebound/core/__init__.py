"""Core infrastructure for Rebound."""

from .config import GlobalConfig, config, configure_logging, get_config, reload_config
from .exceptions import (
    Cancelled,
    ConfigurationError,
    DeadlineExceeded,
    ReboundError,
    UnrecoverableError,
)
from .types import (
    JITTER_INTERVAL,
    NANOSECOND,
    SENTINEL_DURATION,
    Duration,
    StrategyKind,
    from_ns,
    to_ns,
)

__all__ = [
    # Types
    "Duration",
    "NANOSECOND",
    "SENTINEL_DURATION",
    "JITTER_INTERVAL",
    "StrategyKind",
    "to_ns",
    "from_ns",
    # Exceptions
    "ReboundError",
    "ConfigurationError",
    "UnrecoverableError",
    "Cancelled",
    "DeadlineExceeded",
    # Config
    "GlobalConfig",
    "config",
    "get_config",
    "reload_config",
    "configure_logging",
]
