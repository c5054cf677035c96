"""Oscillator locomotion: segment swing angles, body posing, thrust and drag."""

from creatures.locomotion.kinematics import (
    LocomotionResult,
    pose_body,
    segment_drag,
    segment_thrust,
    tick_locomotion,
)
from creatures.locomotion.oscillator import oscillator_angle, oscillator_phase, swing_fraction

__all__ = [
    "LocomotionResult",
    "tick_locomotion",
    "pose_body",
    "segment_thrust",
    "segment_drag",
    "oscillator_angle",
    "oscillator_phase",
    "swing_fraction",
]
