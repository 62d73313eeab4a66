"""Rebound - Composable pause sequences and retry-with-backoff drivers."""

from .core import (
    JITTER_INTERVAL,
    SENTINEL_DURATION,
    Cancelled,
    ConfigurationError,
    DeadlineExceeded,
    Duration,
    # Config
    GlobalConfig,
    # Exceptions
    ReboundError,
    # Types
    StrategyKind,
    UnrecoverableError,
    config,
    configure_logging,
    get_config,
    reload_config,
)
from .resilience import (
    AsyncBackoff,
    # Backoff
    Backoff,
    CancelToken,
    Constant,
    Exponential,
    ExponentialSubsecond,
    Manual,
    NextWait,
    # Retrier
    Retrier,
    Strategy,
    format_duration,
    is_unrecoverable,
    render_status,
    # Drivers
    retry,
    retry_async,
)
from .sequences import (
    cap,
    concat,
    # Sequences
    const,
    exp,
    exp_subsecond,
    factor_jitter,
    interval_jitter,
    jitter,
    limit,
    linear_exp,
)

__version__ = "0.0.1"

__all__ = [
    "__version__",
    # Types
    "Duration",
    "SENTINEL_DURATION",
    "JITTER_INTERVAL",
    "StrategyKind",
    # Exceptions
    "ReboundError",
    "ConfigurationError",
    "UnrecoverableError",
    "Cancelled",
    "DeadlineExceeded",
    # Sequences
    "const",
    "exp",
    "exp_subsecond",
    "linear_exp",
    "limit",
    "concat",
    "cap",
    "jitter",
    "interval_jitter",
    "factor_jitter",
    # Backoff
    "Backoff",
    "AsyncBackoff",
    "NextWait",
    "CancelToken",
    # Drivers
    "retry",
    "retry_async",
    "is_unrecoverable",
    # Retrier
    "Retrier",
    "Strategy",
    "Constant",
    "Exponential",
    "ExponentialSubsecond",
    "Manual",
    "format_duration",
    "render_status",
    # Config
    "GlobalConfig",
    "config",
    "get_config",
    "reload_config",
    "configure_logging",
]
