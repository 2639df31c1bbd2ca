"""Shrine build optimizer.

Tries every pre/post placement of the "any" requirements, seeds a
pre-shrine build for each, runs it through the shrine, tops stats up
afterwards, and keeps the feasible build that leaves the most points
unspent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from shrine_planner.engine.shrine import (
    PreShrineAllocation,
    PreShrineStat,
    simulate_shrine_averaging,
)
from shrine_planner.engine.shrine_config import ShrineConfig
from shrine_planner.models.requirement import validate_desired_stats
from shrine_planner.optimizer.combinations import (
    count_configurations,
    generate_configurations,
)
from shrine_planner.optimizer.specs import Configuration, build_stat_configs

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Solution:
    """A feasible two-phase build."""

    pre_shrine: PreShrineAllocation
    post_shrine: dict[str, int]
    final_stats: dict[str, int]
    total_pre_investment: int
    total_post_investment: int
    leftover_points: int
    shrine_leftover: int
    configuration: Configuration = field(default_factory=dict)

    @property
    def total_points(self) -> int:
        return self.total_pre_investment + self.total_post_investment

    @property
    def score(self) -> int:
        return self.leftover_points


def seed_pre_shrine(configuration: Configuration) -> PreShrineAllocation:
    """Seed the pre-shrine build: ``min_pre``, or 1 point for post-only stats.

    A stat with nothing invested before the shrine is left out of the
    averaging entirely, so post-only stats still need a single point.
    """
    pre_shrine: PreShrineAllocation = {}
    for stat, sc in configuration.items():
        if sc.min_pre > 0:
            pre_shrine[stat] = PreShrineStat(sc.min_pre, sc.is_attunement)
        elif sc.min_post > 0:
            pre_shrine[stat] = PreShrineStat(1, sc.is_attunement)
    return pre_shrine


def evaluate_configuration(
    configuration: Configuration,
    config: ShrineConfig | None = None,
) -> Solution | None:
    """Build and check one candidate. Returns None when it is infeasible."""
    config = config or ShrineConfig()
    pre_shrine = seed_pre_shrine(configuration)
    total_pre = sum(entry.current_pre for entry in pre_shrine.values())
    if total_pre > config.max_total_points:
        return None

    shrine = simulate_shrine_averaging(pre_shrine, config)

    final_stats: dict[str, int] = {}
    total_post = 0
    for stat, sc in configuration.items():
        post_value = shrine.post_shrine.get(stat, 0)
        needed = max(0, sc.min_post - post_value)
        final_stats[stat] = post_value + needed
        total_post += needed

        if final_stats[stat] > config.max_stat_value:
            return None
        entry = pre_shrine.get(stat)
        if entry is not None and entry.current_pre < sc.min_pre:
            return None

    total_points = total_pre + total_post
    if total_points > config.max_total_points:
        return None

    return Solution(
        pre_shrine=pre_shrine,
        post_shrine=shrine.post_shrine,
        final_stats=final_stats,
        total_pre_investment=total_pre,
        total_post_investment=total_post,
        leftover_points=config.max_total_points - total_points,
        shrine_leftover=shrine.leftover_points,
        configuration=configuration,
    )


def optimize(
    desired_stats: Mapping[str, Any],
    config: ShrineConfig | None = None,
) -> Solution | None:
    """Return the build that satisfies *desired_stats* with the most points left.

    *desired_stats* maps stat name to a list of requirements (Requirement
    instances or ``{"value": ..., "condition": ...}`` mappings). Raises
    ValueError on malformed input. Returns None when no placement fits the
    budget. Ties keep the first placement in enumeration order.
    """
    config = config or ShrineConfig()
    requirements = validate_desired_stats(desired_stats)
    stat_configs = build_stat_configs(requirements, config)
    logger.info("Testing %d combinations...", count_configurations(stat_configs))

    best: Solution | None = None
    for configuration in generate_configurations(stat_configs):
        candidate = evaluate_configuration(configuration, config)
        if candidate is None:
            continue
        logger.debug("Feasible candidate: %s (score %d)", candidate.final_stats, candidate.score)
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None:
        logger.info("No valid solution found within constraints.")
    else:
        logger.info(
            "Optimal solution: pre=%d post=%d leftover=%d shrine leftover=%d",
            best.total_pre_investment,
            best.total_post_investment,
            best.leftover_points,
            best.shrine_leftover,
        )
    return best
