"""Metabolism, lifecycle and reproduction configuration constants."""

MAX_ENERGY = 100.0
INITIAL_ENERGY_RATIO = 0.5  # Start with 50% energy

# Energy costs
BASAL_CONSTANT = 0.1  # Per segment per second
MOVEMENT_CONSTANT = 0.001
POWER_EXPONENT = 1.5

# Aging
MAX_AGE = 300.0  # Seconds (5 minutes at normal aging)
NORMAL_AGING_RATE = 1.0

# Energy ratio thresholds for accelerated aging; a ratio equal to a threshold
# takes the lower multiplier
LOW_ENERGY_RATIO = 0.5
CRITICAL_ENERGY_RATIO = 0.2
STARVATION_ENERGY_RATIO = 0.0

LOW_ENERGY_AGING_MULTIPLIER = 1.5
CRITICAL_ENERGY_AGING_MULTIPLIER = 3.0
STARVATION_AGING_MULTIPLIER = 5.0

# Reproduction
REPRODUCTION_THRESHOLD = 80.0
REPRODUCTION_ENERGY_COST = 80.0
MATING_COOLDOWN = 5.0  # Seconds between matings for one creature
MATING_RANGE = 3.0
OFFSPRING_SPAWN_DISTANCE = 3.0
OFFSPRING_SPAWN_JITTER_DEGREES = 30.0

# Food
FOOD_DETECTION_RADIUS = 5.0
FOOD_ENERGY = 10.0
