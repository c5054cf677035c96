"""Per-tick body kinematics and the swimming forces they produce.

``tick_locomotion`` advances every segment's oscillator, re-poses the body
from the root outwards and derives thrust and drag:

- thrust: each segment pushes the fluid along the average displacement of
  its two nodes, so the creature is pushed the opposite way
- drag: a segment aligned with the velocity drags ``BASE_DRAG``; one
  perpendicular to it drags up to its share of ``|v| * DRAG_FACTOR``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from creatures.body.graph import BodyGraph, Segment
from creatures.config.body import (
    BASE_DRAG,
    DEFAULT_CONTROL_COEFFICIENT,
    DRAG_FACTOR,
    MIN_DRAG_SPEED,
    THRUST_COEFFICIENT,
)
from creatures.locomotion.oscillator import oscillator_angle
from creatures.math_utils import Vector2, lerp


@dataclass
class LocomotionResult:
    """Forces and segment state produced by one locomotion tick.

    Attributes:
        thrust: Total thrust over all segments
        drag: Total drag over all segments
        angles: Current swing angle per segment (degrees)
        angular_velocities: Angle change per segment since the previous tick
    """

    thrust: Vector2 = field(default_factory=Vector2)
    drag: Vector2 = field(default_factory=Vector2)
    angles: List[float] = field(default_factory=list)
    angular_velocities: List[float] = field(default_factory=list)

    @property
    def net_force(self) -> Vector2:
        return self.thrust + self.drag


def segment_thrust(segment: Segment, coefficient: float = THRUST_COEFFICIENT) -> Vector2:
    average_delta = (segment.parent.position_delta + segment.child.position_delta) * 0.5
    magnitude = average_delta.length()
    if magnitude == 0:
        return Vector2()
    return -average_delta.normalize() * (magnitude * coefficient)


def segment_drag(
    segment: Segment,
    velocity: Vector2,
    max_drag: float,
    base_drag: float = BASE_DRAG,
) -> Vector2:
    """Drag opposing ``velocity``, growing with the segment's angle to it.

    The angle is divided by 90 degrees and the interpolation factor clamped
    to [0, 1], so anything at or past perpendicular gets the full cap.
    """
    if velocity.length() < MIN_DRAG_SPEED:
        return Vector2()
    angle = segment.direction.angle_to(velocity)
    magnitude = lerp(base_drag, max_drag, angle / 90.0)
    return -velocity.normalize() * magnitude


def pose_body(graph: BodyGraph) -> None:
    """Recompute node positions from segment angles, root at the origin.

    Segments are stored in child order and parents precede children, so one
    pass sees every parent already placed.
    """
    graph.root.local_position.update(0.0, 0.0)
    accumulated: Dict[int, float] = {0: 0.0}
    for segment in graph.segments:
        parent_angle = accumulated.get(segment.parent_index, 0.0)
        direction = segment.base_angle + parent_angle + segment.current_angle
        segment.child.local_position = segment.parent.local_position + Vector2.from_angle(
            direction, segment.length
        )
        accumulated[segment.child_index] = parent_angle + segment.current_angle


def tick_locomotion(
    graph: BodyGraph,
    controls: Optional[Sequence[float]],
    t: float,
    velocity: Vector2,
    apply_forces: bool = True,
) -> LocomotionResult:
    """Advance the body one tick at elapsed time ``t``.

    Args:
        graph: Body to animate (mutated in place)
        controls: Per-segment amplitude coefficients; segments without one
            use ``DEFAULT_CONTROL_COEFFICIENT``
        t: Elapsed simulation time in seconds
        velocity: Current body velocity from the integrator
        apply_forces: When False the body still moves but no force is
            reported (spawn warm-up)

    Returns:
        LocomotionResult with summed forces and per-segment angle data
    """
    controls = controls or ()
    result = LocomotionResult()
    if not graph.segments:
        return result

    for index, segment in enumerate(graph.segments):
        coefficient = controls[index] if index < len(controls) else DEFAULT_CONTROL_COEFFICIENT
        segment.previous_angle = segment.current_angle
        segment.current_angle = oscillator_angle(t, segment, coefficient)
        result.angles.append(segment.current_angle)
        result.angular_velocities.append(segment.angle_change)

    pose_body(graph)

    if apply_forces:
        max_drag = velocity.length() * DRAG_FACTOR / len(graph.segments)
        for segment in graph.segments:
            result.thrust.add_inplace(segment_thrust(segment))
            result.drag.add_inplace(segment_drag(segment, velocity, max_drag))

    graph.commit_positions()
    return result
