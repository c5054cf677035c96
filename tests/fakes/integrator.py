"""Integrator double that records the forces it receives."""

from typing import List, Tuple

from creatures.math_utils import Vector2


class RecordingIntegrator:
    """Keeps velocity unchanged and records every (thrust, drag) pair."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, Vector2, Vector2]] = []

    def integrate(self, creature, thrust: Vector2, drag: Vector2, dt: float) -> Vector2:
        self.calls.append((creature.id, thrust.copy(), drag.copy()))
        return creature.velocity
