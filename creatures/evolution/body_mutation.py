"""Mutation operators for body genomes.

Parametric mutation nudges each motion field of each non-root gene
independently. Structural mutation grows or shrinks the body by one node
while keeping the sequential-parent property (every parent index points to an
earlier gene).
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional

from creatures.config.genetics import (
    BASE_ANGLE_DELTA,
    FORWARD_RATIO_DELTA,
    MAX_ANGLE_DELTA,
    MAX_NODES,
    MIN_NODES,
    MUTATION_RATE,
    OSC_SPEED_DELTA,
    STRUCTURAL_MUTATION_RATE,
)
from creatures.exceptions import ConfigurationError
from creatures.genetics.body_genome import BodyGenome, NodeGene
from creatures.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass
class BodyMutationConfig:
    """Rates and step sizes for body mutation.

    Deltas are half-widths of a uniform perturbation; the mutated value is
    re-clamped to the field's legal interval.
    """

    mutation_rate: float = MUTATION_RATE  # Per gene field
    structural_rate: float = STRUCTURAL_MUTATION_RATE  # Per direction

    base_angle_delta: float = BASE_ANGLE_DELTA
    osc_speed_delta: float = OSC_SPEED_DELTA
    max_angle_delta: float = MAX_ANGLE_DELTA
    forward_ratio_delta: float = FORWARD_RATIO_DELTA

    min_nodes: int = MIN_NODES
    max_nodes: int = MAX_NODES

    def validate(self) -> None:
        for name in ("mutation_rate", "structural_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")
        if self.min_nodes < 1 or self.max_nodes < self.min_nodes:
            raise ConfigurationError(
                f"Invalid node bounds [{self.min_nodes}, {self.max_nodes}]"
            )


DEFAULT_BODY_MUTATION_CONFIG = BodyMutationConfig()


def _nudge(value: float, delta: float, rate: float, rng: random.Random) -> float:
    if rng.random() < rate:
        return value + rng.uniform(-delta, delta)
    return value


def mutate_gene(gene: NodeGene, rng: random.Random, config: BodyMutationConfig) -> NodeGene:
    """Perturb each motion field with probability ``config.mutation_rate``."""
    if gene.is_root:
        return gene
    rate = config.mutation_rate
    return replace(
        gene,
        base_angle=_nudge(gene.base_angle, config.base_angle_delta, rate, rng),
        osc_speed=_nudge(gene.osc_speed, config.osc_speed_delta, rate, rng),
        max_angle=_nudge(gene.max_angle, config.max_angle_delta, rate, rng),
        forward_ratio=_nudge(gene.forward_ratio, config.forward_ratio_delta, rate, rng),
    ).clamped()


def remove_gene(genes: List[NodeGene], index: int) -> List[NodeGene]:
    """Splice out a non-root gene, re-parenting its children to its parent.

    Parent indices above ``index`` shift down by one so they keep pointing at
    the same genes.
    """
    if index <= 0 or index >= len(genes):
        raise IndexError(f"Cannot remove gene {index} from a genome of {len(genes)}")

    removed_parent = genes[index].parent_index
    result: List[NodeGene] = []
    for position, gene in enumerate(genes):
        if position == index:
            continue
        parent = gene.parent_index
        if parent == index:
            parent = removed_parent
        elif parent > index:
            parent -= 1
        result.append(gene if parent == gene.parent_index else replace(gene, parent_index=parent))
    return result


def mutate_body(
    genome: BodyGenome,
    rng: Optional[random.Random] = None,
    config: Optional[BodyMutationConfig] = None,
) -> BodyGenome:
    """Return a mutated copy of ``genome``.

    Args:
        genome: Source genome (never modified)
        rng: Random number generator (required)
        config: Mutation rates; defaults to ``DEFAULT_BODY_MUTATION_CONFIG``

    Returns:
        A new genome with node count inside ``[min_nodes, max_nodes]`` unless
        the source was already outside those bounds.
    """
    _rng = require_rng_param(rng, "mutate_body")
    config = config or DEFAULT_BODY_MUTATION_CONFIG

    genes = [mutate_gene(gene, _rng, config) for gene in genome]

    if len(genes) < config.max_nodes and _rng.random() < config.structural_rate:
        parent = _rng.randrange(len(genes))
        genes.append(NodeGene.random(parent, _rng))
        logger.debug("Body mutation: added node %d under %d", len(genes) - 1, parent)

    if len(genes) > config.min_nodes and _rng.random() < config.structural_rate:
        index = _rng.randrange(1, len(genes))
        genes = remove_gene(genes, index)
        logger.debug("Body mutation: removed node %d", index)

    return BodyGenome(genes)
