"""Sensor encoding: world observations -> brain input values.

Input layout (node ids 0-11):

    0 food distance      4 others distance    7 mate distance     10 speed
    1 food direction     5 others direction   8 mate direction    11 heading
    2 food detected      6 others detected    9 mate detected
    3 energy ratio

Distances are normalised by the sensor radius (1.0 = nothing in range),
directions are relative to the creature's heading in [-1, 1] (fraction of a
half turn) and detection flags are 0 or 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from creatures.exceptions import ConfigurationError
from creatures.genetics.neural_genome import NEATGenome
from creatures.math_utils import Vector2, clamp

FOOD_DISTANCE = 0
FOOD_DIRECTION = 1
FOOD_DETECTED = 2
ENERGY_RATIO = 3
OTHERS_DISTANCE = 4
OTHERS_DIRECTION = 5
OTHERS_DETECTED = 6
MATE_DISTANCE = 7
MATE_DIRECTION = 8
MATE_DETECTED = 9
SPEED = 10
HEADING = 11


@dataclass
class SensorConfig:
    sensor_radius: float = 10.0
    max_speed: float = 10.0  # Speed mapped to input 1.0

    def validate(self) -> None:
        if self.sensor_radius <= 0:
            raise ConfigurationError(f"sensor_radius must be > 0, got {self.sensor_radius}")
        if self.max_speed <= 0:
            raise ConfigurationError(f"max_speed must be > 0, got {self.max_speed}")


@dataclass(frozen=True)
class TargetSense:
    """What one sensor channel sees about its nearest target."""

    distance: float = 1.0
    direction: float = 0.0
    detected: float = 0.0


NOTHING_SENSED = TargetSense()


@dataclass(frozen=True)
class SensorReading:
    food: TargetSense = NOTHING_SENSED
    others: TargetSense = NOTHING_SENSED
    mate: TargetSense = NOTHING_SENSED
    speed: float = 0.0
    heading: float = 0.0


def relative_direction(heading: float, direction: Vector2) -> float:
    """Signed angle from ``heading`` (degrees) to ``direction``, scaled to [-1, 1]."""
    delta = (direction.heading() - heading + 180.0) % 360.0 - 180.0
    return clamp(delta / 180.0, -1.0, 1.0)


def sense_target(
    origin: Vector2, heading: float, target: Optional[Vector2], radius: float
) -> TargetSense:
    """Encode the nearest target of one channel; targets beyond ``radius`` are unseen."""
    if target is None:
        return NOTHING_SENSED
    offset = target - origin
    distance = offset.length()
    if distance > radius:
        return NOTHING_SENSED
    return TargetSense(
        distance=clamp(distance / radius, 0.0, 1.0),
        direction=relative_direction(heading, offset) if distance > 0 else 0.0,
        detected=1.0,
    )


def sense_motion(velocity: Vector2, heading: float, config: SensorConfig) -> Dict[str, float]:
    speed = velocity.length()
    return {
        "speed": clamp(speed / config.max_speed, 0.0, 1.0),
        "heading": relative_direction(heading, velocity) if speed > 0.01 else 0.0,
    }


def encode_inputs(reading: SensorReading, energy_ratio: float) -> Dict[int, float]:
    """Map a reading onto the 12 brain input ids."""
    return {
        FOOD_DISTANCE: reading.food.distance,
        FOOD_DIRECTION: reading.food.direction,
        FOOD_DETECTED: reading.food.detected,
        ENERGY_RATIO: clamp(energy_ratio, 0.0, 1.0),
        OTHERS_DISTANCE: reading.others.distance,
        OTHERS_DIRECTION: reading.others.direction,
        OTHERS_DETECTED: reading.others.detected,
        MATE_DISTANCE: reading.mate.distance,
        MATE_DIRECTION: reading.mate.direction,
        MATE_DETECTED: reading.mate.detected,
        SPEED: reading.speed,
        HEADING: reading.heading,
    }


def outputs_to_coefficients(genome: NEATGenome, outputs: Mapping[int, float]) -> List[float]:
    """Turn sigmoid outputs into per-segment control coefficients in [-1, 1].

    Output nodes are taken in id order, which is segment order.
    """
    return [(outputs.get(node.id, 0.5) - 0.5) * 2.0 for node in genome.output_nodes()]
