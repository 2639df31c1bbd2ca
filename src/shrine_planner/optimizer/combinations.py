"""Enumerate every pre/post placement of "any" requirements."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

from shrine_planner.optimizer.specs import Configuration


def count_any_requirements(stat_configs: Configuration) -> int:
    return sum(len(sc.any_requirements) for sc in stat_configs.values())


def count_configurations(stat_configs: Configuration) -> int:
    """Number of configurations generate_configurations() will yield."""
    return 2 ** count_any_requirements(stat_configs)


def generate_configurations(stat_configs: Configuration) -> Iterator[Configuration]:
    """Yield one Configuration per placement of the "any" requirements.

    "Any" requirements are numbered in stat order, then input order. In
    pattern ``i``, bit ``j`` set sends the j-th one to ``min_pre``, clear
    sends it to ``min_post``; both fold in with ``max``. Patterns are
    yielded from 0 upward. With no "any" requirements the base
    configuration is yielded once.
    """
    placements = [
        (stat, req.value)
        for stat, sc in stat_configs.items()
        for req in sc.any_requirements
    ]
    for pattern in range(2 ** len(placements)):
        minimums = {
            stat: [sc.min_pre, sc.min_post] for stat, sc in stat_configs.items()
        }
        for bit, (stat, value) in enumerate(placements):
            slot = 0 if (pattern >> bit) & 1 else 1
            minimums[stat][slot] = max(minimums[stat][slot], value)
        yield {
            stat: replace(sc, min_pre=minimums[stat][0], min_post=minimums[stat][1])
            for stat, sc in stat_configs.items()
        }
