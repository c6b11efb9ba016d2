"""
Shared fixtures for the test suite.
"""

import pytest

from crumple_toss.toss_core.config_loader import load_config
from crumple_toss.toss_core.variant_catalog import VariantCatalog


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catalog(config):
    return VariantCatalog(config)


@pytest.fixture
def clock():
    return FakeClock()
