"""Innovation-aligned crossover for neural genomes.

Nodes are matched by id and connections by innovation number, so genomes
with different topologies can still be recombined gene by gene. Genes
carried by only one parent are inherited with probability
``DISJOINT_INCLUSION_PROBABILITY``. A connection whose endpoints did not make
it into the offspring is dropped.
"""

import random
from typing import Dict, List, Optional, Tuple

from creatures.config.genetics import DISJOINT_INCLUSION_PROBABILITY
from creatures.genetics.neural_genome import ConnectionGene, NEATGenome
from creatures.util.rng import require_rng_param


def _ordered_union(first: List[int], second: List[int]) -> List[int]:
    seen = set(first)
    return list(first) + [key for key in second if key not in seen]


def _single_offspring(
    parent_a: NEATGenome, parent_b: NEATGenome, rng: random.Random
) -> NEATGenome:
    child = NEATGenome()

    for node_id in _ordered_union(list(parent_a.nodes), list(parent_b.nodes)):
        node_a = parent_a.nodes.get(node_id)
        node_b = parent_b.nodes.get(node_id)
        if node_a is not None and node_b is not None:
            child.add_node(node_a if rng.random() < 0.5 else node_b)
        elif rng.random() < DISJOINT_INCLUSION_PROBABILITY:
            child.add_node(node_a if node_a is not None else node_b)

    genes_a: Dict[int, ConnectionGene] = parent_a.connections_by_innovation()
    genes_b: Dict[int, ConnectionGene] = parent_b.connections_by_innovation()
    for innovation in _ordered_union(list(genes_a), list(genes_b)):
        gene_a = genes_a.get(innovation)
        gene_b = genes_b.get(innovation)
        if gene_a is not None and gene_b is not None:
            gene = gene_a if rng.random() < 0.5 else gene_b
        elif rng.random() < DISJOINT_INCLUSION_PROBABILITY:
            gene = gene_a if gene_a is not None else gene_b
        else:
            continue
        # Dangling connections are refused by add_connection
        child.add_connection(gene)

    return child


def crossover_neural(
    parent_a: NEATGenome,
    parent_b: NEATGenome,
    rng: Optional[random.Random] = None,
) -> Tuple[NEATGenome, NEATGenome]:
    """Produce two independently recombined offspring genomes.

    The offspring may be empty when neither parent shares nodes and every
    coin flip excludes them; ``ensure_non_empty`` handles that downstream.
    """
    _rng = require_rng_param(rng, "crossover_neural")
    return (
        _single_offspring(parent_a, parent_b, _rng),
        _single_offspring(parent_a, parent_b, _rng),
    )
