"""Configuration management for Rebound."""

import logging
import os
import sys
from typing import Optional, TextIO

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()


class GlobalConfig(BaseModel):
    """Global runtime configuration."""

    # Retrier Defaults
    retry_max_attempts: int = Field(
        default_factory=lambda: int(os.getenv("REBOUND_RETRY_MAX_ATTEMPTS", "3"))
    )
    retry_interval: float = Field(
        default_factory=lambda: float(os.getenv("REBOUND_RETRY_INTERVAL", "1.0"))
    )

    # Logging
    log_level: str = Field(
        default_factory=lambda: os.getenv("REBOUND_LOG_LEVEL", "INFO")
    )
    log_format: str = Field(
        default_factory=lambda: os.getenv(
            "REBOUND_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


# Global configuration instance
config = GlobalConfig()


def get_config() -> GlobalConfig:
    """Get global configuration instance."""
    return config


def reload_config() -> GlobalConfig:
    """Reload configuration from environment."""
    load_dotenv(override=True)
    global config
    config = GlobalConfig()
    return config


def configure_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a stream handler to the ``rebound`` logger.

    Args:
        level: Level name, or ``config.log_level``
        fmt: Format string, or ``config.log_format``
        stream: Output stream, or stderr

    Returns:
        The configured ``rebound`` logger
    """
    resolved = logging.getLevelName((level or config.log_level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logger = logging.getLogger("rebound")
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or config.log_format))
    logger.addHandler(handler)
    return logger
