"""Retry drivers for Rebound.

This module provides:
- Backoff iteration with a per-step override handle
- Generic retry drivers (sync and async)
- A stateful retrier with interval strategies and status lines
- Cancellation tokens with optional deadlines
"""

from .backoff import AsyncBackoff, Backoff, NextWait
from .cancel import CancelToken
from .retrier import Retrier
from .retry import is_unrecoverable, retry, retry_async
from .status import format_duration, render_status
from .strategies import Constant, Exponential, ExponentialSubsecond, Manual, Strategy

__all__ = [
    "Backoff",
    "AsyncBackoff",
    "NextWait",
    "CancelToken",
    "retry",
    "retry_async",
    "is_unrecoverable",
    "Retrier",
    "Strategy",
    "Constant",
    "Exponential",
    "ExponentialSubsecond",
    "Manual",
    "format_duration",
    "render_status",
]
