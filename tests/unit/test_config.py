"""Unit tests for configuration and logging setup."""

import io
import logging

from rebound.core.config import GlobalConfig, configure_logging, get_config, reload_config
from rebound.resilience.retry import retry
from rebound.sequences import limit, const


class TestGlobalConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to defaults."""
        for name in (
            "REBOUND_RETRY_MAX_ATTEMPTS",
            "REBOUND_RETRY_INTERVAL",
            "REBOUND_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        cfg = GlobalConfig()

        assert cfg.retry_max_attempts == 3
        assert cfg.retry_interval == 1.0
        assert cfg.log_level == "INFO"
        assert "%(message)s" in cfg.log_format

    def test_reads_environment(self, monkeypatch):
        """Values come from REBOUND_* variables."""
        monkeypatch.setenv("REBOUND_RETRY_MAX_ATTEMPTS", "7")
        monkeypatch.setenv("REBOUND_RETRY_INTERVAL", "0.25")

        cfg = GlobalConfig()

        assert cfg.retry_max_attempts == 7
        assert cfg.retry_interval == 0.25

    def test_reload_config(self, monkeypatch, fresh_config):
        """reload_config replaces the global instance."""
        monkeypatch.setenv("REBOUND_RETRY_MAX_ATTEMPTS", "9")

        reloaded = reload_config()

        assert reloaded.retry_max_attempts == 9
        assert get_config() is reloaded


class TestConfigureLogging:
    """Test logging setup."""

    def test_stream_handler(self):
        """configure_logging writes rebound records to the given stream."""
        stream = io.StringIO()
        logger = configure_logging(level="DEBUG", fmt="%(levelname)s %(message)s", stream=stream)

        try:
            logging.getLogger("rebound.resilience.retry").debug("hello")
            assert stream.getvalue() == "DEBUG hello\n"
            assert logger.level == logging.DEBUG
        finally:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)

    def test_unknown_level_falls_back_to_info(self):
        """Unrecognised level names mean INFO."""
        logger = configure_logging(level="chatty", stream=io.StringIO())

        try:
            assert logger.level == logging.INFO
        finally:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)

    def test_failed_attempts_are_logged(self, caplog, insomniac):
        """Each failed attempt is logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="rebound")

        def always_fails(i, wait):
            raise ValueError(f"boom {i}")

        try:
            retry(always_fails, limit(2, const(0.5)), sleep=insomniac.sleep)
        except ValueError:
            pass

        messages = [r.getMessage() for r in caplog.records if r.name == "rebound.resilience.retry"]
        assert messages == [
            "Attempt 0 failed: ValueError: boom 0 (next wait 0.5s)",
            "Attempt 1 failed: ValueError: boom 1 (next wait 0.5s)",
            "Attempt 2 failed: ValueError: boom 2 (next wait none)",
        ]
