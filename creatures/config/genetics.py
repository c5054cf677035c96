"""Genetic configuration constants (gene ranges, mutation, brain layout)."""

# Body gene ranges
MIN_BASE_ANGLE = 0.0
MAX_BASE_ANGLE = 360.0
MIN_OSC_SPEED = 0.5
MAX_OSC_SPEED = 8.0
MIN_MAX_ANGLE = -180.0
MAX_MAX_ANGLE = 180.0
MIN_FORWARD_RATIO = 0.01
MAX_FORWARD_RATIO = 0.99

# Body genome length bounds (root included)
MIN_NODES = 2
MAX_NODES = 20

# Initial forward ratio range for freshly generated genes (fast stroke is the short one)
RANDOM_FORWARD_RATIO_MIN = 0.01
RANDOM_FORWARD_RATIO_MAX = 0.5

# Body mutation
MUTATION_RATE = 0.1  # Per gene field
STRUCTURAL_MUTATION_RATE = 0.05  # Per direction (add / remove)
BASE_ANGLE_DELTA = 18.0
OSC_SPEED_DELTA = 0.4
MAX_ANGLE_DELTA = 18.0
FORWARD_RATIO_DELTA = 0.05

# Body crossover
MIN_CUT_POINT = 2  # First index a cut may land on
MAX_CUT_POINTS = 3

# Neural genome layout
BRAIN_INPUTS = 12  # Sensor inputs, ids 0..11
INITIAL_INNOVATION_NUMBER = 10000
INITIAL_NODE_ID = 1000

# Random brain generation
INPUT_OUTPUT_CONNECTION_PROBABILITY = 0.7
HIDDEN_CONNECTION_PROBABILITY = 0.5
MAX_INITIAL_HIDDEN_NODES = 2
INITIAL_WEIGHT_RANGE = 2.0
INITIAL_HIDDEN_BIAS_RANGE = 1.0

# Neural parametric mutation
NEURAL_MUTATION_RATE = 0.1
WEIGHT_DELTA = 0.5
MIN_WEIGHT = -3.0
MAX_WEIGHT = 3.0
BIAS_DELTA = 0.3
MIN_BIAS = -2.0
MAX_BIAS = 2.0

# Neural structural mutation (off in the canonical design)
ADD_NODE_RATE = 0.0
ADD_CONNECTION_RATE = 0.0
TOGGLE_CONNECTION_RATE = 0.0
ADD_CONNECTION_ATTEMPTS = 20
SPLIT_NODE_BIAS_RANGE = 0.5

# Crossover inclusion chance for genes carried by only one parent
DISJOINT_INCLUSION_PROBABILITY = 0.5
