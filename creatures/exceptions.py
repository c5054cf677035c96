"""Creature simulation exception hierarchy.

Genome content never raises: malformed genes are repaired or clamped where
they are constructed. These classes cover programmer and setup errors only.
"""


class CreatureSimError(Exception):
    """Root of all creature simulation exceptions."""


class SimulationError(CreatureSimError):
    """Errors during simulation execution (engine, creatures)."""


class GeneticsError(SimulationError):
    """Genome encoding or decoding failure that cannot be repaired."""


class ConfigurationError(CreatureSimError):
    """Invalid or missing configuration."""


class UnknownCreatureError(SimulationError):
    """A creature id does not belong to the simulation."""
