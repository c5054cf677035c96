"""Genome data model for body plans and neural controllers.

- ``BodyGenome``: ordered node genes forming a rooted tree
- ``NEATGenome``: innovation-tagged node/connection graph
- ``InnovationRegistry``: historical markers shared by one evolutionary run

Genomes repair themselves on construction, so nothing downstream has to
handle malformed genes.
"""

from creatures.genetics.body_genome import (
    BodyGenome,
    NodeGene,
    minimal_body_genome,
    random_body_genome,
    reference_body_genome,
)
from creatures.genetics.genome_codec import (
    GENOME_SCHEMA_VERSION,
    body_genome_from_dict,
    body_genome_to_dict,
    neural_genome_from_dict,
    neural_genome_to_dict,
)
from creatures.genetics.innovation import InnovationRegistry
from creatures.genetics.neural_genome import (
    ConnectionGene,
    NEATGenome,
    NeuralNodeGene,
    NodeType,
    adjust_output_nodes,
    ensure_non_empty,
    minimal_brain,
    random_brain,
)
from creatures.genetics.validation import validate_body_genome, validate_neural_genome

__all__ = [
    # Body
    "BodyGenome",
    "NodeGene",
    "random_body_genome",
    "minimal_body_genome",
    "reference_body_genome",
    # Neural
    "NEATGenome",
    "NeuralNodeGene",
    "ConnectionGene",
    "NodeType",
    "random_brain",
    "minimal_brain",
    "ensure_non_empty",
    "adjust_output_nodes",
    "InnovationRegistry",
    # Codec
    "GENOME_SCHEMA_VERSION",
    "body_genome_to_dict",
    "body_genome_from_dict",
    "neural_genome_to_dict",
    "neural_genome_from_dict",
    # Validation
    "validate_body_genome",
    "validate_neural_genome",
]
