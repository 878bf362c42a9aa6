"""Adaptive controller constants."""

# Match duration window (seconds)
MIN_DURATION = 20.0
TARGET_DURATION = 25.0
MAX_DURATION = 30.0

# Damage-scale controller: steer the alive count toward TARGET_SURVIVORS
TARGET_SURVIVORS = 7.5
DAMAGE_GAIN = 0.6
DAMAGE_MIN_POPULATION = 20
DAMAGE_SCALE_INITIAL = 1.0
DAMAGE_SCALE_MIN = 0.7
DAMAGE_SCALE_MAX = 3.5

# Consumption-rate controller
EMA_RETAIN = 0.92
EMA_SAMPLE = 0.08
SCALE_INERTIA = 0.90
SCALE_RESPONSE = 0.10
CONSUMPTION_SCALE_INITIAL = 2.0
CONSUMPTION_SCALE_MIN = 0.30
CONSUMPTION_SCALE_MAX = 3.0
HORIZON_FLOOR = 0.001
RATE_FLOOR = 0.001
