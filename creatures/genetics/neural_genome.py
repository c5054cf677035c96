"""Neural controller genome (NEAT-style).

A sparse graph of typed nodes and innovation-tagged connections. Inputs use
ids ``0..BRAIN_INPUTS-1``, outputs start at ``BRAIN_INPUTS`` (one per body
segment, in segment order) and hidden nodes get ids from the
``InnovationRegistry``.

Invariant: every connection's endpoints exist in the genome's node set.
``add_connection`` refuses dangling connections instead of raising.
"""

from __future__ import annotations

import logging
import random as pyrandom
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, Iterable, List, Optional

from creatures.config.genetics import (
    BRAIN_INPUTS,
    HIDDEN_CONNECTION_PROBABILITY,
    INITIAL_HIDDEN_BIAS_RANGE,
    INITIAL_WEIGHT_RANGE,
    INPUT_OUTPUT_CONNECTION_PROBABILITY,
    MAX_BIAS,
    MAX_INITIAL_HIDDEN_NODES,
    MAX_WEIGHT,
    MIN_BIAS,
    MIN_WEIGHT,
)
from creatures.genetics.innovation import InnovationRegistry
from creatures.math_utils import clamp
from creatures.util.rng import require_rng_param

logger = logging.getLogger(__name__)


class NodeType(IntEnum):
    """Node role; the integer value is the evaluation rank."""

    INPUT = 0
    HIDDEN = 1
    OUTPUT = 2


@dataclass(frozen=True)
class NeuralNodeGene:
    id: int
    type: NodeType
    bias: float = 0.0

    def clamped(self) -> "NeuralNodeGene":
        return replace(self, bias=clamp(float(self.bias), MIN_BIAS, MAX_BIAS))


@dataclass(frozen=True)
class ConnectionGene:
    """A weighted edge between two nodes.

    Attributes:
        input_id: Source node id
        output_id: Target node id
        weight: Connection weight (-3 to 3)
        enabled: Disabled connections contribute nothing
        innovation: Historical marker used to align genes in crossover
    """

    input_id: int
    output_id: int
    weight: float
    innovation: int
    enabled: bool = True

    def clamped(self) -> "ConnectionGene":
        return replace(self, weight=clamp(float(self.weight), MIN_WEIGHT, MAX_WEIGHT))


class NEATGenome:
    """Node and connection genes of one neural controller."""

    __slots__ = ("nodes", "connections")

    def __init__(
        self,
        nodes: Optional[Iterable[NeuralNodeGene]] = None,
        connections: Optional[Iterable[ConnectionGene]] = None,
    ) -> None:
        self.nodes: Dict[int, NeuralNodeGene] = {}
        self.connections: List[ConnectionGene] = []
        for node in nodes or ():
            self.add_node(node)
        for connection in connections or ():
            self.add_connection(connection)

    @classmethod
    def with_io(cls, input_count: int, output_count: int) -> "NEATGenome":
        """Create a genome with only input and output nodes and no connections."""
        genome = cls()
        for i in range(input_count):
            genome.add_node(NeuralNodeGene(i, NodeType.INPUT))
        for i in range(output_count):
            genome.add_node(NeuralNodeGene(input_count + i, NodeType.OUTPUT))
        return genome

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def connection_count(self) -> int:
        return len(self.connections)

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    def add_node(self, node: NeuralNodeGene) -> bool:
        """Add a node unless its id is already present."""
        if node.id in self.nodes:
            return False
        self.nodes[node.id] = node.clamped()
        return True

    def add_connection(self, connection: ConnectionGene) -> bool:
        """Add a connection if both endpoints exist; dangling connections are dropped."""
        if connection.input_id not in self.nodes or connection.output_id not in self.nodes:
            return False
        self.connections.append(connection.clamped())
        return True

    def remove_node(self, node_id: int) -> None:
        """Remove a node together with every connection touching it."""
        self.nodes.pop(node_id, None)
        self.connections = [
            c for c in self.connections if c.input_id != node_id and c.output_id != node_id
        ]

    def has_connection(self, input_id: int, output_id: int) -> bool:
        return any(c.input_id == input_id and c.output_id == output_id for c in self.connections)

    def nodes_of_type(self, node_type: NodeType) -> List[NeuralNodeGene]:
        return [node for node in self.nodes.values() if node.type == node_type]

    def input_nodes(self) -> List[NeuralNodeGene]:
        return sorted(self.nodes_of_type(NodeType.INPUT), key=lambda n: n.id)

    def output_nodes(self) -> List[NeuralNodeGene]:
        """Output nodes in segment order."""
        return sorted(self.nodes_of_type(NodeType.OUTPUT), key=lambda n: n.id)

    def hidden_nodes(self) -> List[NeuralNodeGene]:
        return self.nodes_of_type(NodeType.HIDDEN)

    def active_connections(self) -> List[ConnectionGene]:
        return [c for c in self.connections if c.enabled]

    def connections_by_innovation(self) -> Dict[int, ConnectionGene]:
        return {c.innovation: c for c in self.connections}

    def copy(self) -> "NEATGenome":
        clone = NEATGenome()
        clone.nodes = dict(self.nodes)
        clone.connections = list(self.connections)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NEATGenome):
            return NotImplemented
        return self.nodes == other.nodes and self.connections == other.connections

    def __repr__(self) -> str:
        return f"NEATGenome(nodes={self.node_count}, connections={self.connection_count})"


def _connect(
    genome: NEATGenome,
    input_id: int,
    output_id: int,
    registry: InnovationRegistry,
    rng: pyrandom.Random,
) -> None:
    genome.add_connection(
        ConnectionGene(
            input_id,
            output_id,
            rng.uniform(-INITIAL_WEIGHT_RANGE, INITIAL_WEIGHT_RANGE),
            registry.connection_innovation(input_id, output_id),
        )
    )


def random_brain(
    output_count: int,
    registry: InnovationRegistry,
    rng: Optional[pyrandom.Random] = None,
) -> NEATGenome:
    """Generate a controller with ``BRAIN_INPUTS`` inputs and ``output_count`` outputs.

    Inputs connect straight to outputs with probability 0.7; up to two hidden
    nodes are added, each wired to inputs and outputs with probability 0.5.
    """
    _rng = require_rng_param(rng, "random_brain")
    brain = NEATGenome.with_io(BRAIN_INPUTS, output_count)
    outputs = [BRAIN_INPUTS + i for i in range(output_count)]

    for output_id in outputs:
        for input_id in range(BRAIN_INPUTS):
            if _rng.random() < INPUT_OUTPUT_CONNECTION_PROBABILITY:
                _connect(brain, input_id, output_id, registry, _rng)

    hidden_count = _rng.randint(0, MAX_INITIAL_HIDDEN_NODES)
    for _ in range(hidden_count):
        hidden_id = registry.allocate_node_id()
        brain.add_node(
            NeuralNodeGene(
                hidden_id,
                NodeType.HIDDEN,
                _rng.uniform(-INITIAL_HIDDEN_BIAS_RANGE, INITIAL_HIDDEN_BIAS_RANGE),
            )
        )
        for input_id in range(BRAIN_INPUTS):
            if _rng.random() < HIDDEN_CONNECTION_PROBABILITY:
                _connect(brain, input_id, hidden_id, registry, _rng)
        for output_id in outputs:
            if _rng.random() < HIDDEN_CONNECTION_PROBABILITY:
                _connect(brain, hidden_id, output_id, registry, _rng)

    logger.debug(
        "Generated brain: %d outputs, %d hidden, %d connections",
        output_count,
        hidden_count,
        brain.connection_count,
    )
    return brain


def minimal_brain(registry: InnovationRegistry) -> NEATGenome:
    """The trivial controller substituted for an empty genome: one input, one output."""
    output_id = BRAIN_INPUTS
    brain = NEATGenome(
        [NeuralNodeGene(0, NodeType.INPUT), NeuralNodeGene(output_id, NodeType.OUTPUT)]
    )
    brain.add_connection(
        ConnectionGene(0, output_id, 1.0, registry.connection_innovation(0, output_id))
    )
    return brain


def ensure_non_empty(brain: NEATGenome, registry: InnovationRegistry) -> NEATGenome:
    if brain.node_count == 0:
        logger.debug("Empty neural genome replaced by the minimal controller")
        return minimal_brain(registry)
    return brain


def adjust_output_nodes(
    brain: NEATGenome,
    required_outputs: int,
    registry: InnovationRegistry,
    rng: Optional[pyrandom.Random] = None,
) -> NEATGenome:
    """Return a copy of ``brain`` with exactly one output node per segment.

    Surplus outputs (highest ids first) are removed along with their
    connections. Missing outputs get the next free output ids and are wired
    from the inputs like a freshly generated brain.
    """
    _rng = require_rng_param(rng, "adjust_output_nodes")
    adjusted = brain.copy()
    outputs = adjusted.output_nodes()

    if len(outputs) > required_outputs:
        for node in outputs[required_outputs:]:
            adjusted.remove_node(node.id)
    elif len(outputs) < required_outputs:
        inputs = [node.id for node in adjusted.input_nodes()]
        candidate = BRAIN_INPUTS
        for _ in range(required_outputs - len(outputs)):
            while adjusted.has_node(candidate):
                candidate += 1
            adjusted.add_node(NeuralNodeGene(candidate, NodeType.OUTPUT))
            for input_id in inputs:
                if _rng.random() < INPUT_OUTPUT_CONNECTION_PROBABILITY:
                    _connect(adjusted, input_id, candidate, registry, _rng)
    return adjusted
