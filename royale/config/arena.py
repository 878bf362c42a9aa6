"""Arena and display-related constants."""

# Arena dimensions in pixels (portrait reel format)
ARENA_WIDTH = 1080
ARENA_HEIGHT = 1920

# Radius of the resource disc at the arena centre
RESOURCE_RADIUS = 150.0

# Extra clearance between a spawning actor and the resource rim
SPAWN_MARGIN = 20.0

# Spawn sampling gives up after this many rejected positions
MAX_SPAWN_ATTEMPTS = 10_000

# Reference frame rate; per-frame tuning values are converted with it
REFERENCE_FRAME_RATE = 60

# Largest dt accepted by a single step (seconds)
MAX_DT = 0.05

# Seconds the final state is held before results are produced
WINNER_DISPLAY_TIME = 5.0

# Cosmetic rotation speed of actors (radians per second)
ROTATION_SPEED = 0.01 * REFERENCE_FRAME_RATE

# Maximum number of roster entries simulated as full actors
ANIMATION_CAP = 2000

# Supplementary (visual-only) actors are culled inside this window (seconds)
CULL_DURATION = 5.0

# Decorative oscillation of supplementary actors
WIGGLE_FREQUENCY = 15.0
WIGGLE_AMPLITUDE = 25.0
WIGGLE_OFFSET_STEP = 0.03

# Width of separator lines in console output
SEPARATOR_WIDTH = 60
