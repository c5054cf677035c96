"""Neural controller: evaluator and sensor encoding."""

from creatures.brain.evaluator import evaluate
from creatures.brain.sensors import (
    SensorConfig,
    SensorReading,
    TargetSense,
    encode_inputs,
    outputs_to_coefficients,
    sense_target,
)

__all__ = [
    "evaluate",
    "SensorConfig",
    "SensorReading",
    "TargetSense",
    "encode_inputs",
    "outputs_to_coefficients",
    "sense_target",
]
