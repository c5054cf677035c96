"""Top-level simulation configuration.

``SimulationConfig`` bundles the per-system configs so one object can be
validated, logged and shipped over the API.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from creatures.brain.sensors import SensorConfig
from creatures.config.body import DEFAULT_SEGMENT_LENGTH, DEFAULT_SEGMENT_WIDTH, WARMUP_TICKS
from creatures.config.energy import FOOD_DETECTION_RADIUS, FOOD_ENERGY
from creatures.energy.metabolism import MetabolismParams
from creatures.evolution.body_mutation import BodyMutationConfig
from creatures.evolution.neural_mutation import NeuralMutationConfig
from creatures.evolution.reproduction import ReproductionConfig
from creatures.exceptions import ConfigurationError

DEFAULT_DT = 0.02  # 50 ticks per simulated second
DEFAULT_INITIAL_POPULATION = 10
DEFAULT_WORLD_SIZE = 100.0
DEFAULT_FOOD_PELLETS = 60

_SECTIONS = {
    "metabolism": MetabolismParams,
    "body_mutation": BodyMutationConfig,
    "neural_mutation": NeuralMutationConfig,
    "sensors": SensorConfig,
    "reproduction": ReproductionConfig,
}


@dataclass
class SimulationConfig:
    """Configuration for a simulation run.

    Attributes:
        dt: Default step size in seconds
        initial_population: Creatures spawned by ``Simulation.populate``
        world_size: Side of the square spawn area
        food_pellets: Pellets scattered by the default food source
        food_energy: Energy per food item; also gates when a creature looks for food
        food_detection_radius: Reach of the food query
        warmup_ticks: Ticks after spawn during which no force is produced
    """

    dt: float = DEFAULT_DT
    initial_population: int = DEFAULT_INITIAL_POPULATION
    world_size: float = DEFAULT_WORLD_SIZE
    food_pellets: int = DEFAULT_FOOD_PELLETS
    food_energy: float = FOOD_ENERGY
    food_detection_radius: float = FOOD_DETECTION_RADIUS
    warmup_ticks: int = WARMUP_TICKS
    segment_length: float = DEFAULT_SEGMENT_LENGTH
    segment_width: float = DEFAULT_SEGMENT_WIDTH
    seed: Optional[int] = None

    metabolism: MetabolismParams = field(default_factory=MetabolismParams)
    body_mutation: BodyMutationConfig = field(default_factory=BodyMutationConfig)
    neural_mutation: NeuralMutationConfig = field(default_factory=NeuralMutationConfig)
    sensors: SensorConfig = field(default_factory=SensorConfig)
    reproduction: ReproductionConfig = field(default_factory=ReproductionConfig)

    def validate(self) -> None:
        """Validate every section.

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        if self.dt <= 0:
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if self.initial_population < 0:
            raise ConfigurationError(
                f"initial_population must be >= 0, got {self.initial_population}"
            )
        if self.world_size <= 0:
            raise ConfigurationError(f"world_size must be positive, got {self.world_size}")
        if self.food_pellets < 0 or self.food_energy < 0:
            raise ConfigurationError("Food settings must be non-negative")
        if self.warmup_ticks < 0:
            raise ConfigurationError(f"warmup_ticks must be >= 0, got {self.warmup_ticks}")
        if self.segment_length <= 0 or self.segment_width <= 0:
            raise ConfigurationError("Segment dimensions must be positive")
        for name in _SECTIONS:
            getattr(self, name).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Create a config from a (possibly partial) dictionary. Unknown keys are ignored."""
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                continue
            section = _SECTIONS.get(key)
            if section is not None:
                if not isinstance(value, dict):
                    raise ConfigurationError(f"Section {key!r} must be a mapping")
                value = section(
                    **{k: v for k, v in value.items() if k in section.__dataclass_fields__}
                )
            kwargs[key] = value
        return cls(**kwargs)
