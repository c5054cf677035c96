"""Sexual reproduction: two parent genotypes in, two offspring genotypes out.

Each offspring gets its own body crossover (with mutation) and one of the
two neural crossover children. The brain is then mutated and resized so it
has exactly one output per body segment.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from creatures.config.energy import (
    MATING_COOLDOWN,
    MATING_RANGE,
    OFFSPRING_SPAWN_DISTANCE,
    OFFSPRING_SPAWN_JITTER_DEGREES,
    REPRODUCTION_ENERGY_COST,
    REPRODUCTION_THRESHOLD,
)
from creatures.evolution.body_crossover import crossover_body
from creatures.evolution.body_mutation import BodyMutationConfig
from creatures.evolution.neural_crossover import crossover_neural
from creatures.evolution.neural_mutation import NeuralMutationConfig, mutate_neural
from creatures.exceptions import ConfigurationError
from creatures.genetics.body_genome import BodyGenome
from creatures.genetics.innovation import InnovationRegistry
from creatures.genetics.neural_genome import (
    NEATGenome,
    adjust_output_nodes,
    ensure_non_empty,
)
from creatures.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass
class ReproductionConfig:
    """Mating rules applied by the simulation."""

    threshold: float = REPRODUCTION_THRESHOLD
    energy_cost: float = REPRODUCTION_ENERGY_COST
    mating_cooldown: float = MATING_COOLDOWN
    mating_range: float = MATING_RANGE
    spawn_distance: float = OFFSPRING_SPAWN_DISTANCE
    spawn_jitter_degrees: float = OFFSPRING_SPAWN_JITTER_DEGREES
    max_population: int = 50

    def validate(self) -> None:
        if self.energy_cost < 0:
            raise ConfigurationError(f"energy_cost must be >= 0, got {self.energy_cost}")
        if self.mating_cooldown < 0:
            raise ConfigurationError(f"mating_cooldown must be >= 0, got {self.mating_cooldown}")
        if self.mating_range <= 0:
            raise ConfigurationError(f"mating_range must be > 0, got {self.mating_range}")
        if self.max_population < 1:
            raise ConfigurationError(f"max_population must be >= 1, got {self.max_population}")


@dataclass(frozen=True)
class Genotype:
    """The heritable part of a creature."""

    body: BodyGenome
    brain: NEATGenome

    @property
    def segment_count(self) -> int:
        return self.body.segment_count


def reproduce(
    parent_a: Genotype,
    parent_b: Genotype,
    registry: InnovationRegistry,
    rng: Optional[random.Random] = None,
    body_config: Optional[BodyMutationConfig] = None,
    neural_config: Optional[NeuralMutationConfig] = None,
) -> Tuple[Genotype, Genotype]:
    """Create two offspring genotypes from two parents.

    Parents are left untouched; offspring share no mutable storage with them.
    """
    _rng = require_rng_param(rng, "reproduce")

    bodies = (
        crossover_body(parent_a.body, parent_b.body, _rng, config=body_config),
        crossover_body(parent_a.body, parent_b.body, _rng, config=body_config),
    )
    brains = crossover_neural(parent_a.brain, parent_b.brain, _rng)

    offspring = []
    for body, brain in zip(bodies, brains):
        brain = ensure_non_empty(brain, registry)
        brain = mutate_neural(brain, _rng, neural_config, registry)
        brain = adjust_output_nodes(brain, body.segment_count, registry, _rng)
        offspring.append(Genotype(body, brain))

    logger.debug(
        "Reproduced: parents %d/%d segments -> offspring %d/%d segments",
        parent_a.segment_count,
        parent_b.segment_count,
        offspring[0].segment_count,
        offspring[1].segment_count,
    )
    return offspring[0], offspring[1]
