"""Pytest configuration and fixtures for SkiFree tests."""

import random

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def tuning():
    from skifree.sim.tuning import Tuning

    return Tuning()


@pytest.fixture
def store():
    from skifree.sim.store import EntityStore

    return EntityStore()


@pytest.fixture
def simulation():
    """A freshly reset simulation with a fixed seed."""
    from skifree.sim.clock import Simulation

    sim = Simulation(seed=42)
    sim.reset()
    return sim


@pytest.fixture
def empty_slope(simulation):
    """The seeded simulation with its obstacles removed."""
    simulation.store.replace_entities([])
    simulation.drain_events()
    return simulation


class FixedRng:
    """Stands in for random.Random where a test needs exact rolls."""

    def __init__(self, *values):
        self._values = list(values) or [0.0]
        self._i = 0

    def random(self):
        value = self._values[min(self._i, len(self._values) - 1)]
        self._i += 1
        return value


@pytest.fixture
def fixed_rng():
    return FixedRng
