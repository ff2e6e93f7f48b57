import pytest

from simcore.config import SimulationSettings
from simcore.simulation import Simulation


class FakeClock:
    """Wall clock that advances by a fixed tick on every read."""

    def __init__(self, tick=0.01):
        self.now = 0.0
        self.tick = tick

    def __call__(self):
        self.now += self.tick
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_sim(fake_clock):
    def _make(**overrides):
        return Simulation(SimulationSettings(**overrides), wall_clock=fake_clock)
    return _make
