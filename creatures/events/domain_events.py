"""Lifecycle events returned by the tick functions.

Events are data-only frozen dataclasses. Core functions return them instead
of invoking callbacks; the simulation tags them with the creature id and
frame and queues them until the caller drains the queue.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CreatureDied:
    """A creature died. Fired exactly once per creature.

    Attributes:
        reason: Cause of death ("old_age")
        age: Age at death in seconds
        creature_id: ID of the creature (0 until tagged by the simulation)
        frame: Simulation frame when this occurred
    """

    reason: str
    age: float
    creature_id: int = 0
    frame: int = 0


@dataclass(frozen=True)
class ReproductionReadyChanged:
    """Energy crossed the reproduction threshold in either direction.

    Attributes:
        ready: New readiness
        energy: Energy right after the crossing
    """

    ready: bool
    energy: float
    creature_id: int = 0
    frame: int = 0


@dataclass(frozen=True)
class FoodConsumed:
    """A creature ate.

    Attributes:
        energy_gained: Energy actually added after clamping to max energy
    """

    energy_gained: float
    creature_id: int = 0
    frame: int = 0


@dataclass(frozen=True)
class CreatureBorn:
    """An offspring was spawned by reproduction."""

    parent_ids: tuple[int, int]
    segment_count: int
    creature_id: int = 0
    frame: int = 0


LifecycleEvent = Union[CreatureDied, ReproductionReadyChanged, FoodConsumed, CreatureBorn]
