"""Optimization and planning interfaces."""

from shrine_planner.optimizer.combinations import count_configurations, generate_configurations
from shrine_planner.optimizer.planner import Solution, evaluate_configuration, optimize
from shrine_planner.optimizer.specs import Configuration, StatConfig, build_stat_configs

__all__ = [
    "Configuration",
    "Solution",
    "StatConfig",
    "build_stat_configs",
    "count_configurations",
    "evaluate_configuration",
    "generate_configurations",
    "optimize",
]
