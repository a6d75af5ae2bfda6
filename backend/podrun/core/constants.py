"""Shared application constants.

Centralizes the fixed values of the run tracker and journal so we can
document and adjust them in one place. Tunable values live in settings.
"""

# Steps counted per kilometre of simulated distance
STEPS_PER_KM = 1300

# Calories burned per kilometre (the other variant used 100)
DEFAULT_CALORIES_PER_KM = 65

# Default distance simulation: +5 m per one-second tick
DEFAULT_DISTANCE_INCREMENT_KM = 0.005
DEFAULT_DISTANCE_EVERY_TICKS = 1

# Pace shown before any distance has accumulated
PACE_SENTINEL = "0:00"

# Decimal places kept for simulated distance (avoids float drift)
DISTANCE_PRECISION = 6

# Name shown on the feed when a profile has no name set
ANONYMOUS_RUNNER = "Runner"
