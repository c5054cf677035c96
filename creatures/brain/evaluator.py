"""Feed-forward evaluation of a neural genome.

Nodes are visited by type rank (inputs, then hidden, then outputs), keeping
insertion order within a rank. This is not a full topological sort: a
hidden node fed by another hidden node that comes later in the genome reads
0 for that source. Evolved behaviour is tuned against this ordering, so it
is kept as is.
"""

from typing import Dict, Mapping

from creatures.genetics.neural_genome import NEATGenome, NodeType
from creatures.math_utils import sigmoid


def evaluate(genome: NEATGenome, inputs: Mapping[int, float]) -> Dict[int, float]:
    """Propagate ``inputs`` through ``genome``.

    Args:
        genome: Controller genome
        inputs: Input node id -> value. Ids missing here are simply unset.

    Returns:
        Node id -> activation for every input supplied and every non-input
        node of the genome.
    """
    values: Dict[int, float] = {node_id: float(value) for node_id, value in inputs.items()}

    incoming: Dict[int, list] = {}
    for connection in genome.connections:
        if connection.enabled:
            incoming.setdefault(connection.output_id, []).append(connection)

    ordered = sorted(genome.nodes.values(), key=lambda node: int(node.type))
    for node in ordered:
        if node.type == NodeType.INPUT:
            continue
        total = node.bias
        for connection in incoming.get(node.id, ()):
            total += values.get(connection.input_id, 0.0) * connection.weight
        values[node.id] = sigmoid(total)

    return values
