"""Mutation operators for neural genomes.

Parametric mutation (weights and biases) is always on. Structural mutation
(split a connection with a hidden node, add a connection, toggle a
connection) is available but its rates default to zero; it needs the
simulation's ``InnovationRegistry`` so new genes get shared markers.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from creatures.config.genetics import (
    ADD_CONNECTION_ATTEMPTS,
    ADD_CONNECTION_RATE,
    ADD_NODE_RATE,
    BIAS_DELTA,
    INITIAL_WEIGHT_RANGE,
    MAX_BIAS,
    MAX_WEIGHT,
    MIN_BIAS,
    MIN_WEIGHT,
    NEURAL_MUTATION_RATE,
    SPLIT_NODE_BIAS_RANGE,
    TOGGLE_CONNECTION_RATE,
    WEIGHT_DELTA,
)
from creatures.exceptions import ConfigurationError
from creatures.genetics.innovation import InnovationRegistry
from creatures.genetics.neural_genome import (
    ConnectionGene,
    NEATGenome,
    NeuralNodeGene,
    NodeType,
)
from creatures.math_utils import clamp
from creatures.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass
class NeuralMutationConfig:
    """Rates and step sizes for neural mutation."""

    weight_rate: float = NEURAL_MUTATION_RATE
    weight_delta: float = WEIGHT_DELTA
    bias_rate: float = NEURAL_MUTATION_RATE
    bias_delta: float = BIAS_DELTA

    add_node_rate: float = ADD_NODE_RATE
    add_connection_rate: float = ADD_CONNECTION_RATE
    toggle_connection_rate: float = TOGGLE_CONNECTION_RATE
    add_connection_attempts: int = ADD_CONNECTION_ATTEMPTS

    @property
    def structural(self) -> bool:
        return (
            self.add_node_rate > 0.0
            or self.add_connection_rate > 0.0
            or self.toggle_connection_rate > 0.0
        )

    def validate(self) -> None:
        for name in (
            "weight_rate",
            "bias_rate",
            "add_node_rate",
            "add_connection_rate",
            "toggle_connection_rate",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if self.weight_delta < 0 or self.bias_delta < 0:
            raise ConfigurationError("Mutation deltas must be non-negative")


DEFAULT_NEURAL_MUTATION_CONFIG = NeuralMutationConfig()


def mutate_neural(
    genome: NEATGenome,
    rng: Optional[random.Random] = None,
    config: Optional[NeuralMutationConfig] = None,
    registry: Optional[InnovationRegistry] = None,
) -> NEATGenome:
    """Return a mutated copy of ``genome``.

    Raises:
        ConfigurationError: If structural rates are enabled without a registry
    """
    _rng = require_rng_param(rng, "mutate_neural")
    config = config or DEFAULT_NEURAL_MUTATION_CONFIG
    mutated = genome.copy()

    mutated.connections = [
        replace(
            connection,
            weight=clamp(
                connection.weight + _rng.uniform(-config.weight_delta, config.weight_delta),
                MIN_WEIGHT,
                MAX_WEIGHT,
            ),
        )
        if _rng.random() < config.weight_rate
        else connection
        for connection in mutated.connections
    ]

    for node_id, node in list(mutated.nodes.items()):
        if node.type == NodeType.INPUT:
            continue
        if _rng.random() < config.bias_rate:
            mutated.nodes[node_id] = replace(
                node,
                bias=clamp(
                    node.bias + _rng.uniform(-config.bias_delta, config.bias_delta),
                    MIN_BIAS,
                    MAX_BIAS,
                ),
            )

    if config.structural:
        if registry is None:
            raise ConfigurationError("Structural neural mutation requires an InnovationRegistry")
        if _rng.random() < config.add_node_rate:
            add_node_mutation(mutated, registry, _rng)
        if _rng.random() < config.add_connection_rate:
            add_connection_mutation(mutated, registry, _rng, config.add_connection_attempts)
        if _rng.random() < config.toggle_connection_rate:
            toggle_connection_mutation(mutated, _rng)

    return mutated


def add_node_mutation(
    genome: NEATGenome, registry: InnovationRegistry, rng: random.Random
) -> bool:
    """Split an enabled connection ``a -> b`` into ``a -> new -> b``.

    The old connection is disabled. The incoming connection gets weight 1 and
    the outgoing one inherits the old weight, so behaviour barely changes.
    Returns False when there is nothing to split or the split node already
    exists in this genome.
    """
    candidates = genome.active_connections()
    if not candidates:
        return False
    target = rng.choice(candidates)
    node_id = registry.node_split_id(target.innovation)
    if genome.has_node(node_id):
        return False

    index = genome.connections.index(target)
    genome.connections[index] = replace(target, enabled=False)
    genome.add_node(
        NeuralNodeGene(
            node_id,
            NodeType.HIDDEN,
            rng.uniform(-SPLIT_NODE_BIAS_RANGE, SPLIT_NODE_BIAS_RANGE),
        )
    )
    genome.add_connection(
        ConnectionGene(
            target.input_id,
            node_id,
            1.0,
            registry.connection_innovation(target.input_id, node_id),
        )
    )
    genome.add_connection(
        ConnectionGene(
            node_id,
            target.output_id,
            target.weight,
            registry.connection_innovation(node_id, target.output_id),
        )
    )
    logger.debug("Neural mutation: split connection %d with node %d", target.innovation, node_id)
    return True


def add_connection_mutation(
    genome: NEATGenome,
    registry: InnovationRegistry,
    rng: random.Random,
    attempts: int = ADD_CONNECTION_ATTEMPTS,
) -> bool:
    """Connect a random (input|hidden) node to a random (hidden|output) node.

    Hidden-to-hidden links are not created: the evaluator's type-rank
    ordering could not feed them reliably.
    """
    sources = genome.input_nodes() + genome.hidden_nodes()
    hidden = genome.hidden_nodes()
    targets = hidden + genome.output_nodes()
    if not sources or not targets:
        return False

    for _ in range(attempts):
        source = rng.choice(sources)
        target = rng.choice(targets)
        if source.type == NodeType.HIDDEN and target.type == NodeType.HIDDEN:
            continue
        if genome.has_connection(source.id, target.id):
            continue
        genome.add_connection(
            ConnectionGene(
                source.id,
                target.id,
                rng.uniform(-INITIAL_WEIGHT_RANGE, INITIAL_WEIGHT_RANGE),
                registry.connection_innovation(source.id, target.id),
            )
        )
        logger.debug("Neural mutation: connected %d -> %d", source.id, target.id)
        return True
    return False


def toggle_connection_mutation(genome: NEATGenome, rng: random.Random) -> bool:
    if not genome.connections:
        return False
    index = rng.randrange(len(genome.connections))
    connection = genome.connections[index]
    genome.connections[index] = replace(connection, enabled=not connection.enabled)
    return True
