"""Cut-point crossover for body genomes.

Both parents are walked in index order. A handful of random cut points
(never before index 2, never past the shorter parent) switch which parent
genes are copied from. Once the current source parent runs out of genes the
walk stops, so the child's length is the length of whichever parent was
being copied after the last cut.
"""

import random
from typing import List, Optional

from creatures.config.genetics import MAX_CUT_POINTS, MIN_CUT_POINT
from creatures.evolution.body_mutation import BodyMutationConfig, mutate_body
from creatures.genetics.body_genome import BodyGenome, NodeGene
from creatures.util.rng import require_rng_param


def choose_cut_points(min_length: int, rng: random.Random) -> List[int]:
    """Pick 1..MAX_CUT_POINTS sorted cut indices in ``[MIN_CUT_POINT, min_length - 1]``.

    Returns an empty list when the shorter parent is too short to cut.
    """
    available = min_length - MIN_CUT_POINT
    if available <= 0:
        return []
    count = rng.randint(1, min(MAX_CUT_POINTS, available))
    return sorted(rng.sample(range(MIN_CUT_POINT, min_length), count))


def crossover_body(
    parent_a: BodyGenome,
    parent_b: BodyGenome,
    rng: Optional[random.Random] = None,
    mutate: bool = True,
    config: Optional[BodyMutationConfig] = None,
) -> BodyGenome:
    """Recombine two body genomes into one offspring genome.

    Args:
        parent_a: First parent (copied from before the first cut)
        parent_b: Second parent
        rng: Random number generator (required)
        mutate: Apply ``mutate_body`` to the recombined genome
        config: Mutation config passed through to ``mutate_body``

    Returns:
        A new genome; parents are never modified
    """
    _rng = require_rng_param(rng, "crossover_body")
    parents = (parent_a.genes, parent_b.genes)
    min_length = min(len(parent_a), len(parent_b))
    max_length = max(len(parent_a), len(parent_b))
    cuts = set(choose_cut_points(min_length, _rng))

    genes: List[NodeGene] = []
    source = 0
    for index in range(max_length):
        if index in cuts:
            source = 1 - source
        parent = parents[source]
        if index >= len(parent):
            break
        genes.append(parent[index])

    child = BodyGenome(genes)
    if mutate:
        child = mutate_body(child, _rng, config)
    return child
