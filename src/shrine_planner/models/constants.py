"""Shrine budgets, stat caps, and the attunement stat names.

Values match the live game. They are the defaults of ShrineConfig; code
that needs a different budget should pass a config instead of patching
these.
"""

# Total points a build can spend across both phases.
MAX_TOTAL_POINTS = 330

# Highest value any single stat may reach.
MAX_STAT_VALUE = 100

# Largest drop an ordinary stat may take from its pre-shrine investment
# when the shrine averages it.
BOTTLENECK_LIMIT = 25

# Attunement stats are exempt from the bottleneck. Matched case-insensitively.
ATTUNEMENT_STATS: tuple[str, ...] = (
    "flamecharm",
    "frostdraw",
    "thundercall",
    "galebreathe",
    "shadowcast",
    "ironsing",
    "bloodrend",
)

# Build power thresholds (power = (points - 15) // 15, clamped).
POWER_POINT_OFFSET = 15
POINTS_PER_POWER = 15
MAX_POWER = 20
