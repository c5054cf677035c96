"""Evolving articulated swimmers.

Procedurally generated creatures with a tree-shaped body and a NEAT-style
neural controller swim by oscillating their segments, pay energy to live and
move, and reproduce sexually when well fed.

Typical use::

    from creatures import Simulation, SimulationConfig

    sim = Simulation(SimulationConfig(seed=42))
    sim.scatter_food()
    sim.populate()
    for _ in range(1000):
        sim.step()
    events = sim.drain_events()
"""

from creatures.body import BodyGraph, Node, Segment, build_body
from creatures.brain import SensorReading, encode_inputs, evaluate, outputs_to_coefficients
from creatures.config.simulation_config import SimulationConfig
from creatures.creature import Creature
from creatures.energy import (
    MetabolismParams,
    MetabolismState,
    MetabolismTick,
    aging_multiplier,
    feed,
    tick_metabolism,
)
from creatures.events import (
    CreatureBorn,
    CreatureDied,
    FoodConsumed,
    ReproductionReadyChanged,
)
from creatures.evolution import (
    BodyMutationConfig,
    Genotype,
    NeuralMutationConfig,
    ReproductionConfig,
    crossover_body,
    crossover_neural,
    mutate_body,
    mutate_neural,
    reproduce,
)
from creatures.exceptions import (
    ConfigurationError,
    CreatureSimError,
    GeneticsError,
    SimulationError,
    UnknownCreatureError,
)
from creatures.genetics import (
    BodyGenome,
    InnovationRegistry,
    NEATGenome,
    NodeGene,
    random_body_genome,
    random_brain,
)
from creatures.locomotion import LocomotionResult, tick_locomotion
from creatures.math_utils import Vector2
from creatures.simulation import Simulation
from creatures.util.rng import MissingRNGError

__all__ = [
    # Genomes
    "BodyGenome",
    "NodeGene",
    "NEATGenome",
    "InnovationRegistry",
    "random_body_genome",
    "random_brain",
    # Core operations
    "build_body",
    "evaluate",
    "crossover_body",
    "mutate_body",
    "crossover_neural",
    "mutate_neural",
    "reproduce",
    "tick_locomotion",
    "tick_metabolism",
    "feed",
    "aging_multiplier",
    "encode_inputs",
    "outputs_to_coefficients",
    # Types
    "BodyGraph",
    "Node",
    "Segment",
    "Genotype",
    "LocomotionResult",
    "MetabolismParams",
    "MetabolismState",
    "MetabolismTick",
    "SensorReading",
    "Vector2",
    # Configuration
    "SimulationConfig",
    "BodyMutationConfig",
    "NeuralMutationConfig",
    "ReproductionConfig",
    # Simulation
    "Creature",
    "Simulation",
    # Events
    "CreatureBorn",
    "CreatureDied",
    "FoodConsumed",
    "ReproductionReadyChanged",
    # Errors
    "CreatureSimError",
    "SimulationError",
    "GeneticsError",
    "ConfigurationError",
    "UnknownCreatureError",
    "MissingRNGError",
]
