"""Simple default collaborators: scattered food pellets and a point-mass integrator.

Both are deliberately plain. Richer worlds (noise-driven food fields, rigid
body physics, wrapping) plug in through ``creatures.contracts``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from creatures.config.energy import FOOD_ENERGY
from creatures.math_utils import Vector2

if TYPE_CHECKING:
    from creatures.creature import Creature

logger = logging.getLogger(__name__)


@dataclass
class FoodPellets:
    """A fixed set of food pellets; each can be eaten once."""

    positions: List[Vector2] = field(default_factory=list)
    energy: float = FOOD_ENERGY

    @classmethod
    def scatter(
        cls, rng: random.Random, count: int, size: float, energy: float = FOOD_ENERGY
    ) -> "FoodPellets":
        """Place ``count`` pellets uniformly in a square of side ``size`` around the origin."""
        half = size / 2.0
        return cls(
            [Vector2(rng.uniform(-half, half), rng.uniform(-half, half)) for _ in range(count)],
            energy,
        )

    @property
    def remaining(self) -> int:
        return len(self.positions)

    def _nearest_index(self, position: Vector2, radius: float) -> Optional[int]:
        best_index = None
        best_distance = radius
        for index, pellet in enumerate(self.positions):
            distance = pellet.distance_to(position)
            if distance <= best_distance:
                best_index = index
                best_distance = distance
        return best_index

    def nearest(self, position: Vector2, radius: float) -> Optional[Vector2]:
        index = self._nearest_index(position, radius)
        return None if index is None else self.positions[index]

    def consume_near(self, position: Vector2, radius: float) -> Optional[float]:
        index = self._nearest_index(position, radius)
        if index is None:
            return None
        self.positions.pop(index)
        return self.energy


@dataclass
class PointMassIntegrator:
    """Euler integration of the summed forces on a unit point mass.

    Attributes:
        mass: Body mass per segment
        damping: Velocity multiplier applied every tick (water resistance
            not captured by segment drag)
        max_speed: Speed cap
    """

    mass: float = 1.0
    damping: float = 0.98
    max_speed: float = 10.0

    def integrate(
        self, creature: "Creature", thrust: Vector2, drag: Vector2, dt: float
    ) -> Vector2:
        total_mass = self.mass * max(1, creature.segment_count)
        velocity = creature.velocity + (thrust + drag) * (dt / total_mass)
        velocity = velocity * self.damping
        speed = velocity.length()
        if speed > self.max_speed:
            velocity = velocity.normalize() * self.max_speed
        return velocity
