"""A living creature: genotype, built body and metabolic state."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from creatures.body.builder import build_body
from creatures.body.graph import BodyGraph
from creatures.brain.evaluator import evaluate
from creatures.brain.sensors import SensorReading, encode_inputs, outputs_to_coefficients
from creatures.config.body import DEFAULT_SEGMENT_LENGTH, DEFAULT_SEGMENT_WIDTH
from creatures.energy.metabolism import DEFAULT_METABOLISM_PARAMS, MetabolismParams, MetabolismState
from creatures.evolution.reproduction import Genotype
from creatures.locomotion.kinematics import LocomotionResult
from creatures.math_utils import Vector2

logger = logging.getLogger(__name__)


class Creature:
    """One simulated swimmer.

    The creature owns its body graph and metabolic state. It does not step
    itself; ``Simulation.step`` drives it through the fixed tick order.

    Attributes:
        id: Unique id within the simulation
        genotype: Body and brain genomes
        body: Body graph built from ``genotype.body``
        metabolism: Current metabolic state
        position: World position of the root node
        velocity: Current velocity from the integrator
        heading: Direction of travel in degrees (kept while stationary)
        orientation: Direction the body faces in degrees (see ``orientation``)
        generation: 0 for spawned creatures, parents' max + 1 for offspring
    """

    def __init__(
        self,
        creature_id: int,
        genotype: Genotype,
        position: Optional[Vector2] = None,
        params: MetabolismParams = DEFAULT_METABOLISM_PARAMS,
        generation: int = 0,
        born_at: float = 0.0,
        segment_length: float = DEFAULT_SEGMENT_LENGTH,
        segment_width: float = DEFAULT_SEGMENT_WIDTH,
    ) -> None:
        self.id = creature_id
        self.genotype = genotype
        self.body: BodyGraph = build_body(genotype.body, segment_length, segment_width)
        self.metabolism = MetabolismState.initial(params)
        self.position = position.copy() if position is not None else Vector2()
        self.velocity = Vector2()
        self.heading = 0.0
        self.generation = generation
        self.born_at = born_at

        self.ticks_alive = 0
        self.last_mating_time: Optional[float] = None
        self.last_partner_id: Optional[int] = None
        self.offspring_count = 0
        self.food_eaten = 0
        self.distance_travelled = 0.0
        self.movement_energy_spent = 0.0
        self.last_locomotion = LocomotionResult()
        self.last_controls: List[float] = []

    @property
    def alive(self) -> bool:
        return self.metabolism.alive

    @property
    def energy(self) -> float:
        return self.metabolism.current_energy

    @property
    def reproduction_ready(self) -> bool:
        return self.metabolism.alive and self.metabolism.reproduction_ready

    @property
    def segment_count(self) -> int:
        return self.body.segment_count

    @property
    def node_count(self) -> int:
        return self.body.node_count

    @property
    def orientation(self) -> float:
        """Facing of the posed body: the root's first segment, root to child.

        Body poses are world-aligned, so this turns as that segment swings and
        is independent of the velocity. A body with no segments faces its
        direction of travel.
        """
        for segment in self.body.segments:
            if segment.parent_index == 0 and segment.direction.length() > 0:
                return segment.direction.heading()
        return self.heading

    def in_warmup(self, warmup_ticks: int) -> bool:
        return self.ticks_alive < warmup_ticks

    def think(self, reading: SensorReading) -> List[float]:
        """Evaluate the brain on ``reading`` and return per-segment coefficients."""
        inputs = encode_inputs(reading, self.metabolism.energy_ratio)
        outputs = evaluate(self.genotype.brain, inputs)
        self.last_controls = outputs_to_coefficients(self.genotype.brain, outputs)
        return self.last_controls

    def move(self, velocity: Vector2, dt: float) -> None:
        """Adopt the integrator's velocity and advance the root position."""
        self.velocity = velocity
        step = velocity * dt
        self.position = self.position + step
        self.distance_travelled += step.length()
        if velocity.length() > 0.01:
            self.heading = velocity.heading()

    def can_mate_at(self, time: float, cooldown: float) -> bool:
        return self.last_mating_time is None or time - self.last_mating_time >= cooldown

    def movement_efficiency(self) -> float:
        """Distance travelled per unit of movement energy (0 before any movement)."""
        if self.movement_energy_spent <= 0:
            return 0.0
        return self.distance_travelled / self.movement_energy_spent

    def stats(self) -> Dict[str, Any]:
        """Summary for logging and the API."""
        return {
            "id": self.id,
            "generation": self.generation,
            "alive": self.alive,
            "node_count": self.node_count,
            "segment_count": self.segment_count,
            "energy": self.metabolism.current_energy,
            "max_energy": self.metabolism.max_energy,
            "energy_ratio": self.metabolism.energy_ratio,
            "age": self.metabolism.age,
            "reproduction_ready": self.reproduction_ready,
            "position": self.position.to_tuple(),
            "velocity": self.velocity.to_tuple(),
            "speed": self.velocity.length(),
            "heading": self.heading,
            "orientation": self.orientation,
            "distance_travelled": self.distance_travelled,
            "efficiency": self.movement_efficiency(),
            "offspring_count": self.offspring_count,
            "food_eaten": self.food_eaten,
        }

    def __repr__(self) -> str:
        return (
            f"Creature(id={self.id}, segments={self.segment_count}, "
            f"energy={self.energy:.1f}, age={self.metabolism.age:.1f})"
        )
