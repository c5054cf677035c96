"""Body graph and locomotion configuration constants."""

# Body graph geometry
DEFAULT_NODE_SIZE = 1.0
DEFAULT_SEGMENT_LENGTH = 2.0
DEFAULT_SEGMENT_WIDTH = 0.5

# Forces
THRUST_COEFFICIENT = 15.0  # Reaction force per unit of averaged node displacement
BASE_DRAG = 0.1  # Drag magnitude for a segment aligned with the velocity
DRAG_FACTOR = 0.2  # Total drag cap as a fraction of speed, split across segments
MIN_DRAG_SPEED = 0.01  # Below this speed no drag is produced

# Forces are suppressed for the first few ticks so spawn placement settles
WARMUP_TICKS = 5

# Brain output -> oscillation amplitude coefficient when a segment has no output
DEFAULT_CONTROL_COEFFICIENT = 1.0
