"""Test doubles for simulation collaborators."""

from tests.fakes.food import FakeFoodSource
from tests.fakes.integrator import RecordingIntegrator
from tests.fakes.peers import FixedPeerIndex

__all__ = ["FakeFoodSource", "FixedPeerIndex", "RecordingIntegrator"]
