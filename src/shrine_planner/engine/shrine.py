"""Shrine averaging simulator.

The shrine pools every point invested in stats with a positive pre-shrine
value and hands it back in equal shares. Ordinary stats are protected by
the bottleneck: none may end up more than ``bottleneck_limit`` below its
pre-shrine investment. A stat that would is clamped ("capped") and the
points it kept are taken back from the ordinary stats that are still
uncapped. Attunement stats take the plain average and are never clamped
or charged for a clamp.

Averaging stays in exact Fraction arithmetic until every clamp is settled;
only then are values floored, and the points lost to flooring are handed
back one at a time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from fractions import Fraction

from shrine_planner.engine.shrine_config import ShrineConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PreShrineStat:
    """Points invested in one stat before the shrine."""

    current_pre: int
    is_attunement: bool = False


# Stat name -> pre-shrine investment, in the order stats were configured.
PreShrineAllocation = dict[str, PreShrineStat]


@dataclass(slots=True)
class ShrineResult:
    """Stat values after averaging plus points the shrine could not place."""

    total_invested: int = 0
    post_shrine: dict[str, int] = field(default_factory=dict)
    leftover_points: int = 0
    capped: tuple[str, ...] = ()                    # In capping order
    averaged: dict[str, Fraction] = field(default_factory=dict)  # Before flooring


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


def simulate_shrine_averaging(
    allocation: PreShrineAllocation,
    config: ShrineConfig | None = None,
) -> ShrineResult:
    """Average *allocation* through the shrine and return post-shrine values.

    Only stats with ``current_pre > 0`` take part; the rest are absent from
    the result. ``is_attunement`` on each entry decides whether the
    bottleneck applies to it.
    """
    config = config or ShrineConfig()
    affected = [stat for stat, entry in allocation.items() if entry.current_pre > 0]
    if not affected:
        return ShrineResult()

    total_invested = sum(allocation[stat].current_pre for stat in affected)
    average = Fraction(total_invested, len(affected))
    values = {stat: average for stat in affected}
    ordinary = [stat for stat in affected if not allocation[stat].is_attunement]

    capped = _apply_bottleneck(values, allocation, ordinary, config.bottleneck_limit)

    post_shrine = {stat: math.floor(value) for stat, value in values.items()}
    spare = total_invested - sum(post_shrine.values())
    spare = _distribute_spare_points(
        post_shrine, spare, affected, capped, config.max_stat_value
    )

    return ShrineResult(
        total_invested=total_invested,
        post_shrine=post_shrine,
        leftover_points=max(0, spare),
        capped=tuple(capped),
        averaged=values,
    )


def _apply_bottleneck(
    values: dict[str, Fraction],
    allocation: PreShrineAllocation,
    ordinary: list[str],
    limit: int,
) -> list[str]:
    """Clamp ordinary stats in *values* until no drop exceeds *limit*.

    Mutates *values* and returns the capped stats in capping order. Each
    pass either caps at least one more stat or ends the loop, so it runs
    at most ``len(ordinary)`` passes.
    """
    capped: list[str] = []
    while True:
        snapshot = dict(values)
        delta = Fraction(0)
        for stat in ordinary:
            if stat in capped:
                continue
            floor_value = allocation[stat].current_pre - limit
            if floor_value > snapshot[stat]:
                values[stat] = Fraction(floor_value)
                delta += values[stat] - snapshot[stat]
                capped.append(stat)
                logger.debug(
                    "Bottleneck: %s capped at %d (average %s)",
                    stat, floor_value, snapshot[stat],
                )

        remaining = [stat for stat in ordinary if stat not in capped]
        if not remaining or delta == 0:
            if delta != 0:
                logger.debug("Bottleneck: %s points kept with no stat to absorb them", delta)
            return capped

        # Uncapped ordinary stats pay for what the capped ones kept.
        share = delta / len(remaining)
        overflow = False
        for stat in remaining:
            values[stat] -= share
            if allocation[stat].current_pre - values[stat] > limit:
                overflow = True
        if not overflow:
            return capped


def _distribute_spare_points(
    post_shrine: dict[str, int],
    spare: int,
    affected: list[str],
    capped: list[str],
    max_stat_value: int,
) -> int:
    """Hand out *spare* points one at a time, round-robin over *affected*.

    Capped stats and stats at *max_stat_value* are skipped. Returns the
    points that could not be placed.
    """
    while spare > 0:
        changed = False
        for stat in affected:
            if spare <= 0:
                break
            if stat in capped or post_shrine[stat] >= max_stat_value:
                continue
            post_shrine[stat] += 1
            spare -= 1
            changed = True
        if not changed:
            break
    return spare
