"""Resource (pizza) sizing and consumption constants."""

from royale.config.arena import REFERENCE_FRAME_RATE

# Capacity = simulated actors * (BASE + PER_BAND * floor(count / BAND_SIZE))
CAPACITY_BASE_MULTIPLIER = 1.5
CAPACITY_PER_BAND = 0.08
CAPACITY_BAND_SIZE = 50

# Units eaten per second per point of consumption rate (0.035 per reference frame)
CONSUMPTION_COEFFICIENT = 0.035 * REFERENCE_FRAME_RATE

# Roster entries without an explicit rate eat at this speed
DEFAULT_CONSUMPTION_RATE = 20.0

# Crowd modifier, based on the initial simulated count
CROWD_SMALL_LIMIT = 50
CROWD_SMALL_FLOOR = 0.5
CROWD_LARGE_LIMIT = 100
CROWD_LARGE_BASE = 0.9
CROWD_LARGE_SPAN = 600.0
CROWD_LARGE_FLOOR = 0.08

# Global eat intensity grows with every death
INITIAL_EAT_INTENSITY = 1.2
INTENSITY_PER_DEATH = 0.035
INTENSITY_PER_DEATH_ENDGAME = 0.015

# Late-game brake when few actors remain on a mostly eaten resource
LATE_BRAKE_EATEN_FRACTION = 0.6
LATE_BRAKE_ALIVE_LIMIT = 25
LATE_BRAKE_STRENGTH = 0.45

# Endgame-only brake for the final slice
FINAL_BRAKE_EATEN_FRACTION = 0.85
FINAL_BRAKE_REMAINING_FRACTION = 0.10
FINAL_BRAKE_SLOPE = 1.5
FINAL_BRAKE_FLOOR = 0.7

# Remaining amount treated as "eaten up"
DEPLETION_EPSILON = 0.1
