"""Asymmetric segment oscillator.

Each segment swings between 0 and ``max_angle`` on a half-sine profile. The
cycle is split in two: a fast forward stroke taking ``forward_ratio`` of the
period, then a slower recovery stroke for the rest. A control coefficient
from the brain scales the amplitude.
"""

import math

from creatures.body.graph import Segment


def oscillator_phase(t: float, osc_speed: float, forward_ratio: float) -> float:
    """Phase in [0, 2*pi) at time ``t``.

    The forward stroke covers [0, pi], the recovery stroke [pi, 2*pi).
    """
    cycle_time = (t / osc_speed) % osc_speed
    forward_duration = osc_speed * forward_ratio
    if cycle_time < forward_duration:
        return (cycle_time / forward_duration) * math.pi
    back_duration = osc_speed * (1.0 - forward_ratio)
    return math.pi + ((cycle_time - forward_duration) / back_duration) * math.pi


def swing_fraction(phase: float) -> float:
    """Half-sine swing profile: 0 at phase 0, 1 at pi, back to 0 at 2*pi."""
    return (math.sin(phase - math.pi / 2.0) + 1.0) / 2.0


def oscillator_angle(t: float, segment: Segment, coefficient: float = 1.0) -> float:
    """Target swing angle of ``segment`` at time ``t`` in degrees."""
    phase = oscillator_phase(t, segment.osc_speed, segment.forward_ratio)
    return swing_fraction(phase) * segment.max_angle * coefficient
