"""Genetic operators.

There is no fitness function: creatures that find food live long enough to
reach the reproduction threshold, and that is the only selection. This
package only defines how two parents' genomes combine and vary.

- Body: cut-point crossover, parametric + structural mutation
- Neural: innovation-aligned crossover, weight/bias mutation (structural
  mutation available, off by default)
"""

from creatures.evolution.body_crossover import choose_cut_points, crossover_body
from creatures.evolution.body_mutation import (
    DEFAULT_BODY_MUTATION_CONFIG,
    BodyMutationConfig,
    mutate_body,
    remove_gene,
)
from creatures.evolution.neural_crossover import crossover_neural
from creatures.evolution.neural_mutation import (
    DEFAULT_NEURAL_MUTATION_CONFIG,
    NeuralMutationConfig,
    mutate_neural,
)
from creatures.evolution.reproduction import Genotype, ReproductionConfig, reproduce

__all__ = [
    # Body
    "crossover_body",
    "choose_cut_points",
    "mutate_body",
    "remove_gene",
    "BodyMutationConfig",
    "DEFAULT_BODY_MUTATION_CONFIG",
    # Neural
    "crossover_neural",
    "mutate_neural",
    "NeuralMutationConfig",
    "DEFAULT_NEURAL_MUTATION_CONFIG",
    # Reproduction
    "Genotype",
    "ReproductionConfig",
    "reproduce",
]
