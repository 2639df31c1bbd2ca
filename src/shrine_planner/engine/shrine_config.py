"""Configuration knobs for the shrine optimizer.

Defaults match the live game. Tests and alternate rulesets may override
the point budget, the stat cap, the bottleneck limit, or the attunement
set.
"""

from dataclasses import dataclass

from shrine_planner.models.constants import (
    ATTUNEMENT_STATS,
    BOTTLENECK_LIMIT,
    MAX_STAT_VALUE,
    MAX_TOTAL_POINTS,
)


@dataclass(slots=True)
class ShrineConfig:
    """Tuneable parameters shared by the simulator and the optimizer."""

    max_total_points: int = MAX_TOTAL_POINTS   # Budget across both phases
    max_stat_value: int = MAX_STAT_VALUE       # Per-stat cap
    bottleneck_limit: int = BOTTLENECK_LIMIT   # Max drop for ordinary stats
    attunement_stats: tuple[str, ...] = ATTUNEMENT_STATS

    def __post_init__(self) -> None:
        for name in ("max_total_points", "max_stat_value", "bottleneck_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        self.attunement_stats = tuple(s.strip().lower() for s in self.attunement_stats)

    def is_attunement(self, stat: str) -> bool:
        return stat.lower() in self.attunement_stats
