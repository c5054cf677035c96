"""Protocols for the collaborators the simulation calls into.

The core never implements collision detection, physics or food placement
itself beyond the simple defaults in ``creatures.world``; anything matching
these protocols can be plugged into a ``Simulation``.
"""

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

from creatures.math_utils import Vector2

if TYPE_CHECKING:
    from creatures.creature import Creature


@runtime_checkable
class FoodSource(Protocol):
    """Anything that can hand out food energy at a position."""

    def nearest(self, position: Vector2, radius: float) -> Optional[Vector2]:
        """Position of the nearest uneaten food within ``radius``, or None."""
        ...

    def consume_near(self, position: Vector2, radius: float) -> Optional[float]:
        """Consume the nearest food within ``radius`` and return its energy, or None."""
        ...


@runtime_checkable
class PeerIndex(Protocol):
    """Spatial query for reproduction-ready creatures."""

    def ready_peers_near(self, position: Vector2, radius: float) -> List["Creature"]:
        ...


@runtime_checkable
class PhysicsIntegrator(Protocol):
    """Applies swimming forces to a creature's body."""

    def integrate(
        self, creature: "Creature", thrust: Vector2, drag: Vector2, dt: float
    ) -> Vector2:
        """Return the creature's new velocity."""
        ...
