"""Built body graph: nodes (joints) and segments (rigid links).

Positions are local to the body: the root stays at the origin and the whole
body is moved by the external physics integrator. Locomotion mutates node and
segment records in place every tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from creatures.math_utils import Vector2


@dataclass(eq=False)
class Node:
    local_position: Vector2
    previous_position: Vector2
    size: float

    @property
    def position_delta(self) -> Vector2:
        """Displacement since the previous tick."""
        return self.local_position - self.previous_position

    def commit_position(self) -> None:
        self.previous_position = self.local_position.copy()


@dataclass(eq=False)
class Segment:
    """Link from ``parent`` to ``child`` driven by the child's oscillator gene.

    ``parent`` and ``child`` reference nodes owned by the same ``BodyGraph``.
    Angles are in degrees.
    """

    parent: Node
    child: Node
    parent_index: int
    child_index: int
    length: float
    width: float
    osc_speed: float
    max_angle: float
    forward_ratio: float
    base_angle: float
    current_angle: float = 0.0
    previous_angle: float = 0.0

    @property
    def angle_change(self) -> float:
        return self.current_angle - self.previous_angle

    @property
    def direction(self) -> Vector2:
        """Unit vector from parent to child (zero for a collapsed segment)."""
        return (self.child.local_position - self.parent.local_position).normalize()


@dataclass
class BodyGraph:
    nodes: List[Node] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)
    _incoming: Dict[int, Segment] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not self._incoming:
            self._incoming = {segment.child_index: segment for segment in self.segments}

    def add_segment(self, segment: Segment) -> None:
        self.segments.append(segment)
        self._incoming[segment.child_index] = segment

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def incoming_segment(self, node_index: int) -> Optional[Segment]:
        """The segment ending at ``node_index`` (None for the root)."""
        return self._incoming.get(node_index)

    def positions(self) -> List[Vector2]:
        return [node.local_position for node in self.nodes]

    def commit_positions(self) -> None:
        """Snapshot current positions as the previous ones for the next tick."""
        for node in self.nodes:
            node.commit_position()
