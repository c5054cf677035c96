"""Pytest configuration and fixtures for creature simulation tests."""

import random

import pytest

from creatures.config.simulation_config import SimulationConfig
from creatures.genetics.body_genome import reference_body_genome
from creatures.genetics.innovation import InnovationRegistry
from creatures.simulation import Simulation


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def registry():
    """A fresh innovation registry."""
    return InnovationRegistry()


@pytest.fixture
def reference_genome():
    """The five-node body used throughout the docs."""
    return reference_body_genome()


@pytest.fixture
def simulation():
    """A seeded simulation with no creatures and no food."""
    return Simulation(SimulationConfig(seed=42))
