"""
Shared pytest fixtures for lode_zone tests

The engine takes an injectable clock and random generator, so every fixture
here is deterministic.
"""
import numpy as np
import pytest

from lode_zone.config import EngineConfig, LayoutConfig
from lode_zone.geometry.shapes import Viewport
from lode_zone.layout import ZoneLayoutBuilder
from lode_zone.manager import ZoneManager


class FakeClock:
    """Manually advanced millisecond clock"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def hd_viewport():
    return Viewport(1920, 1080)


@pytest.fixture
def hd_zones(hd_viewport):
    """Live zones of a default 1920x1080 layout, in layout order"""
    return list(ZoneLayoutBuilder().build(hd_viewport, LayoutConfig()))


@pytest.fixture
def manager(clock):
    """Seeded, uninitialized manager on the fake clock"""
    return ZoneManager(EngineConfig(seed=42), clock=clock)


@pytest.fixture
def hd_manager(manager, hd_viewport):
    """Seeded manager initialized for 1920x1080"""
    manager.initialize_zones(hd_viewport)
    return manager
