"""Body plan genome.

A body genome is an ordered list of node genes forming a rooted tree: gene 0
is the root and every later gene attaches to a parent with a smaller index.
That ordering lets the builder place each node in a single forward pass.

Malformed input is repaired once, when the genome is constructed:
- an empty gene list becomes a single root
- gene 0 is forced to be a motionless root
- a parent index outside ``[0, i-1]`` is clamped to ``i-1``
- every numeric field is clamped to its legal interval
"""

from __future__ import annotations

import logging
import random as pyrandom
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union, overload

from creatures.config.genetics import (
    MAX_BASE_ANGLE,
    MAX_FORWARD_RATIO,
    MAX_MAX_ANGLE,
    MAX_NODES,
    MAX_OSC_SPEED,
    MIN_BASE_ANGLE,
    MIN_FORWARD_RATIO,
    MIN_MAX_ANGLE,
    MIN_NODES,
    MIN_OSC_SPEED,
    RANDOM_FORWARD_RATIO_MAX,
    RANDOM_FORWARD_RATIO_MIN,
)
from creatures.math_utils import clamp
from creatures.util.rng import require_rng_param

logger = logging.getLogger(__name__)

ROOT_PARENT_INDEX = -1

GeneTuple = Tuple[int, float, float, float, float]


@dataclass(frozen=True)
class NodeGene:
    """One joint of the body plan.

    Attributes:
        parent_index: Index of the gene this node attaches to (-1 for the root)
        base_angle: Rest orientation of the incoming segment in degrees (0-360)
        osc_speed: Oscillation period parameter (0.5-8.0)
        max_angle: Swing amplitude in degrees (-180 to 180)
        forward_ratio: Fraction of the cycle spent in the fast stroke (0.01-0.99)
    """

    parent_index: int
    base_angle: float = 0.0
    osc_speed: float = MIN_OSC_SPEED
    max_angle: float = 0.0
    forward_ratio: float = 0.5

    @property
    def is_root(self) -> bool:
        return self.parent_index == ROOT_PARENT_INDEX

    def is_valid_at(self, position: int) -> bool:
        """Check the sequential-parent rule for this gene at ``position``."""
        if position == 0:
            return self.is_root
        return 0 <= self.parent_index < position

    def clamped(self) -> "NodeGene":
        """Return a copy with every motion field inside its legal interval."""
        return replace(
            self,
            base_angle=clamp(float(self.base_angle), MIN_BASE_ANGLE, MAX_BASE_ANGLE),
            osc_speed=clamp(float(self.osc_speed), MIN_OSC_SPEED, MAX_OSC_SPEED),
            max_angle=clamp(float(self.max_angle), MIN_MAX_ANGLE, MAX_MAX_ANGLE),
            forward_ratio=clamp(float(self.forward_ratio), MIN_FORWARD_RATIO, MAX_FORWARD_RATIO),
        )

    def as_tuple(self) -> GeneTuple:
        return (
            self.parent_index,
            self.base_angle,
            self.osc_speed,
            self.max_angle,
            self.forward_ratio,
        )

    @classmethod
    def root(cls) -> "NodeGene":
        """The motionless root gene."""
        return cls(ROOT_PARENT_INDEX, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_tuple(cls, values: Sequence[float]) -> "NodeGene":
        """Build a gene from ``(parent, base_angle, osc_speed, max_angle, forward_ratio)``."""
        parent, base_angle, osc_speed, max_angle, forward_ratio = values
        return cls(
            int(parent), float(base_angle), float(osc_speed), float(max_angle), float(forward_ratio)
        )

    @classmethod
    def random(cls, parent_index: int, rng: pyrandom.Random) -> "NodeGene":
        """Generate a gene with uniformly random motion parameters."""
        return cls(
            parent_index=parent_index,
            base_angle=rng.uniform(MIN_BASE_ANGLE, MAX_BASE_ANGLE),
            osc_speed=rng.uniform(MIN_OSC_SPEED, MAX_OSC_SPEED),
            max_angle=rng.uniform(MIN_MAX_ANGLE, MAX_MAX_ANGLE),
            forward_ratio=rng.uniform(RANDOM_FORWARD_RATIO_MIN, RANDOM_FORWARD_RATIO_MAX),
        )


def repair_genes(genes: Iterable[NodeGene]) -> Tuple[NodeGene, ...]:
    """Apply the construction-time repair policy to a gene sequence."""
    source = list(genes)
    if not source:
        logger.debug("Empty body genome replaced by a single root")
        return (NodeGene.root(),)

    repaired: List[NodeGene] = [NodeGene.root()]
    for position, gene in enumerate(source[1:], start=1):
        if not gene.is_valid_at(position):
            logger.debug(
                "Repairing parent index %d at position %d -> %d",
                gene.parent_index,
                position,
                position - 1,
            )
            gene = replace(gene, parent_index=position - 1)
        repaired.append(gene.clamped())
    return tuple(repaired)


class BodyGenome:
    """Ordered, repaired sequence of node genes.

    Instances are immutable: genetic operators return new genomes.
    """

    __slots__ = ("_genes",)

    def __init__(self, genes: Optional[Iterable[Union[NodeGene, Sequence[float]]]] = None) -> None:
        converted = [
            gene if isinstance(gene, NodeGene) else NodeGene.from_tuple(gene)
            for gene in (genes or ())
        ]
        self._genes: Tuple[NodeGene, ...] = repair_genes(converted)

    @property
    def genes(self) -> Tuple[NodeGene, ...]:
        return self._genes

    @property
    def node_count(self) -> int:
        return len(self._genes)

    @property
    def segment_count(self) -> int:
        return len(self._genes) - 1

    @property
    def root(self) -> NodeGene:
        return self._genes[0]

    def children_of(self, parent_index: int) -> List[int]:
        """Indices of genes attached directly to ``parent_index``."""
        return [i for i, gene in enumerate(self._genes) if gene.parent_index == parent_index]

    def with_genes(self, genes: Iterable[NodeGene]) -> "BodyGenome":
        return BodyGenome(genes)

    def __len__(self) -> int:
        return len(self._genes)

    def __iter__(self) -> Iterator[NodeGene]:
        return iter(self._genes)

    @overload
    def __getitem__(self, index: int) -> NodeGene: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[NodeGene, ...]: ...

    def __getitem__(self, index):
        return self._genes[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BodyGenome):
            return NotImplemented
        return self._genes == other._genes

    def __hash__(self) -> int:
        return hash(self._genes)

    def __repr__(self) -> str:
        return f"BodyGenome(node_count={self.node_count})"


def random_body_genome(
    rng: Optional[pyrandom.Random] = None,
    node_count: Optional[int] = None,
) -> BodyGenome:
    """Generate a random body plan with ``MIN_NODES..MAX_NODES`` nodes."""
    _rng = require_rng_param(rng, "random_body_genome")
    if node_count is None:
        node_count = _rng.randint(MIN_NODES, MAX_NODES)
    node_count = int(clamp(node_count, 1, MAX_NODES))

    genes = [NodeGene.root()]
    for i in range(1, node_count):
        genes.append(NodeGene.random(_rng.randrange(i), _rng))
    return BodyGenome(genes)


def minimal_body_genome() -> BodyGenome:
    """A root with a single swinging segment."""
    return BodyGenome([NodeGene.root(), NodeGene(0, 0.0, 2.0, 45.0, 0.25)])


def reference_body_genome() -> BodyGenome:
    """Five-node reference body used by demos and tests."""
    return BodyGenome(
        [
            (-1, 0.0, 0.0, 0.0, 0.0),
            (0, 0.0, 3.0, 45.0, 0.2),
            (0, 120.0, 3.5, -45.0, 0.6),
            (1, 45.0, 4.0, -60.0, 0.5),
            (2, 180.0, 2.5, 120.0, 0.3),
        ]
    )
