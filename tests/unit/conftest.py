"""Shared fixtures for unit tests."""

import pytest

from rebound.core.config import reload_config


class Insomniac:
    """Sleep replacement that records the intervals instead of sleeping."""

    def __init__(self):
        self.intervals = []

    def sleep(self, interval):
        self.intervals.append(interval)

    async def sleep_async(self, interval):
        self.intervals.append(interval)


@pytest.fixture
def insomniac():
    return Insomniac()


@pytest.fixture
def fresh_config():
    """Reload config from the environment around a test."""
    yield reload_config()
    reload_config()
