"""Movement, sizing and combat constants."""

from royale.config.arena import REFERENCE_FRAME_RATE

# Fixed speed magnitude (18 px per reference frame)
MAX_SPEED = 18.0 * REFERENCE_FRAME_RATE

# Movement slows down once the field has thinned out
ENDGAME_SPEED_MULTIPLIER = 0.7

# Symmetric luck term added to every attack roll
LUCK_RANGE = 10

# Collision intensity = base + relative normal speed / max speed
INTENSITY_BASE = 0.5

# Below this many living actors the last-standing rule protects a survivor
LAST_STANDING_THRESHOLD = 3

# Endgame size bonus per whole unit of endgame score
ENDGAME_SIZE_BONUS_PER_UNIT = 0.5

# Bonuses granted per bite during the endgame
ATTACK_BOOST_PER_BITE = 2.0
HEALTH_BOOST_PER_BITE = 1.0
DEFENSE_BOOST_PER_BITE = 0.5
SPEED_BOOST_PER_BITE = 1.04
SPEED_BOOST_CAP = 1.8  # multiple of MAX_SPEED

# Actor diameter by number of living participants: (exclusive lower bound, diameter).
# The first band whose bound is exceeded wins; the cap band is added at runtime.
DIAMETER_BANDS = (
    (700, 15.0),
    (500, 35.0),
    (100, 55.0),
    (20, 75.0),
    (10, 95.0),
    (5, 105.0),
)
CROWD_DIAMETER = 10.0  # more participants than the animation cap
SOLO_DIAMETER = 135.0  # five or fewer participants

# Radius is only recomputed when the live count crosses one of these bounds.
# Offsets are relative to the animation cap.
RADIUS_CAP_OFFSETS = (50_000, 10_000, 0)
RADIUS_THRESHOLDS = (500, 100, 20, 10, 5, 1)

# Grid cells span this many base radii
GRID_CELL_RADII = 4.0

# Live simulated count at which the endgame starts
ENDGAME_THRESHOLD = 50

# Health value rendered as a full health bar
HEALTH_BAR_SCALE = 100.0
