"""Per-stat requirement summaries consumed by the optimizer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from shrine_planner.engine.shrine_config import ShrineConfig
from shrine_planner.models.requirement import Condition, Requirement


@dataclass(frozen=True, slots=True)
class StatConfig:
    """What one stat needs before and after the shrine.

    ``min_pre``/``min_post`` start from the pre/post requirements; each
    configuration folds the "any" requirements into one of them.
    """

    is_attunement: bool
    min_pre: int = 0
    min_post: int = 0
    any_requirements: tuple[Requirement, ...] = ()


# Stat name -> StatConfig for one placement of every "any" requirement.
Configuration = dict[str, StatConfig]


def build_stat_configs(
    desired: Mapping[str, Sequence[Requirement]],
    config: ShrineConfig | None = None,
) -> Configuration:
    """Summarize validated requirements per stat, skipping stats with none."""
    config = config or ShrineConfig()
    stat_configs: Configuration = {}
    for stat, requirements in desired.items():
        if not requirements:
            continue
        min_pre = max((r.value for r in requirements if r.condition is Condition.PRE), default=0)
        min_post = max((r.value for r in requirements if r.condition is Condition.POST), default=0)
        stat_configs[stat] = StatConfig(
            is_attunement=config.is_attunement(stat),
            min_pre=min_pre,
            min_post=min_post,
            any_requirements=tuple(r for r in requirements if r.condition is Condition.ANY),
        )
    return stat_configs
