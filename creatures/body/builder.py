"""Expands a body genome into a body graph."""

import logging

from creatures.config.body import (
    DEFAULT_NODE_SIZE,
    DEFAULT_SEGMENT_LENGTH,
    DEFAULT_SEGMENT_WIDTH,
)
from creatures.body.graph import BodyGraph, Node, Segment
from creatures.genetics.body_genome import BodyGenome
from creatures.math_utils import Vector2

logger = logging.getLogger(__name__)


def build_body(
    genome: BodyGenome,
    segment_length: float = DEFAULT_SEGMENT_LENGTH,
    segment_width: float = DEFAULT_SEGMENT_WIDTH,
    node_size: float = DEFAULT_NODE_SIZE,
) -> BodyGraph:
    """Place every node and create one segment per non-root node.

    Node 0 sits at the origin. Node ``i`` is placed ``segment_length`` away
    from its parent in the direction of its ``base_angle``. Parents always
    precede children in a ``BodyGenome``, so one forward pass suffices.
    """
    graph = BodyGraph()
    root = Node(Vector2(0.0, 0.0), Vector2(0.0, 0.0), node_size)
    graph.nodes.append(root)

    for index, gene in enumerate(genome.genes[1:], start=1):
        parent = graph.nodes[gene.parent_index]
        position = parent.local_position + Vector2.from_angle(gene.base_angle, segment_length)
        child = Node(position, position.copy(), node_size)
        graph.nodes.append(child)
        graph.add_segment(
            Segment(
                parent=parent,
                child=child,
                parent_index=gene.parent_index,
                child_index=index,
                length=segment_length,
                width=segment_width,
                osc_speed=gene.osc_speed,
                max_angle=gene.max_angle,
                forward_ratio=gene.forward_ratio,
                base_angle=gene.base_angle,
            )
        )

    logger.debug("Built body: %d nodes, %d segments", graph.node_count, graph.segment_count)
    return graph
