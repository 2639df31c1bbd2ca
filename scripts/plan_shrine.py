"""Plan a shrine build from desired-stat JSON.

Usage examples:
    python -m scripts.plan_shrine --requirements-file wants.json
    python -m scripts.plan_shrine --requirements-json '{"strength":[{"value":40,"condition":"pre"}]}'
    python -m scripts.plan_shrine --requirements-file wants.json --json
    python -m scripts.plan_shrine --requirements-file wants.json --max-total-points 300

The JSON object maps stat name to a list of requirements. Each entry is
either ``{"value": 40, "condition": "pre"}`` (condition defaults to
"any") or a bare number meaning an "any" requirement. Zero values are
treated as blank slots and dropped.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

from shrine_planner.engine.shrine_config import ShrineConfig
from shrine_planner.logging_config import setup_logging
from shrine_planner.models.power import power_for_points
from shrine_planner.optimizer.planner import Solution, optimize


EXIT_OK = 0
EXIT_INFEASIBLE = 1
EXIT_INVALID = 2


def _parse_int_like(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"Expected integer-like value, got: {value!r}")


def _load_json_arg(raw_json: str | None, file_path: Path | None) -> dict[str, Any]:
    if raw_json is not None:
        payload = json.loads(raw_json)
    elif file_path is not None:
        payload = json.loads(file_path.read_text())
    else:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")
    return payload


def _json_safe(value: Any) -> Any:
    """Recursively normalize values for JSON serialization."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def _desired_from_dict(data: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
    """Normalize form-style JSON into the optimizer's input mapping."""
    desired: dict[str, list[dict[str, Any]]] = {}
    for stat, entries in data.items():
        if not isinstance(entries, list):
            entries = [entries]
        parsed: list[dict[str, Any]] = []
        for entry in entries:
            if isinstance(entry, dict):
                if "value" not in entry:
                    raise ValueError(f"{stat}: requirement {entry!r} has no value")
                value = _parse_int_like(entry["value"])
                condition = entry.get("condition") or "any"
            else:
                value = _parse_int_like(entry)
                condition = "any"
            if value == 0:
                continue
            parsed.append({"value": value, "condition": condition})
        desired[str(stat)] = parsed
    return desired


def _render_text_result(solution: Solution) -> str:
    lines: list[str] = []
    lines.append("pre-shrine build:")
    for stat, entry in solution.pre_shrine.items():
        tag = " (attunement)" if entry.is_attunement else ""
        lines.append(f"  {stat:<14} {entry.current_pre:>3}{tag}")
    lines.append("post-shrine values:")
    for stat, value in solution.post_shrine.items():
        lines.append(f"  {stat:<14} {value:>3}")
    lines.append("final stats:")
    for stat, value in solution.final_stats.items():
        lines.append(f"  {stat:<14} {value:>3}")
    lines.append("")
    lines.append(f"pre-shrine investment: {solution.total_pre_investment}")
    lines.append(f"post-shrine investment: {solution.total_post_investment}")
    lines.append(f"total points used: {solution.total_points}")
    lines.append(f"leftover points: {solution.leftover_points}")
    lines.append(f"shrine leftover: {solution.shrine_leftover}")
    lines.append(f"power: {power_for_points(solution.total_points)}")
    return "\n".join(lines)


def _solution_payload(solution: Solution) -> dict[str, Any]:
    payload = asdict(solution)
    payload["total_points"] = solution.total_points
    payload["power"] = power_for_points(solution.total_points)
    return _json_safe(payload)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Plan a pre/post shrine build")
    req_group = parser.add_mutually_exclusive_group(required=True)
    req_group.add_argument("--requirements-file", type=Path, help="Path to desired-stat JSON file.")
    req_group.add_argument("--requirements-json", type=str, help="Inline desired-stat JSON object.")

    defaults = ShrineConfig()
    parser.add_argument("--max-total-points", type=int, default=defaults.max_total_points)
    parser.add_argument("--max-stat-value", type=int, default=defaults.max_stat_value)
    parser.add_argument("--bottleneck-limit", type=int, default=defaults.bottleneck_limit)
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("--log-level", default="WARNING", help="Console log level.")
    parser.add_argument("--log-file", type=Path, help="Also write DEBUG logs to this file.")
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        payload = _load_json_arg(args.requirements_json, args.requirements_file)
        desired = _desired_from_dict(payload)
        config = ShrineConfig(
            max_total_points=args.max_total_points,
            max_stat_value=args.max_stat_value,
            bottleneck_limit=args.bottleneck_limit,
        )
        solution = optimize(desired, config)
    except (ValueError, OSError) as exc:
        # json.JSONDecodeError is a ValueError
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    if solution is None:
        if args.json:
            print(json.dumps({"success": False}))
        else:
            print("No valid solution found within constraints. Please adjust your requirements.")
        return EXIT_INFEASIBLE

    if args.json:
        print(json.dumps({"success": True, **_solution_payload(solution)}, indent=2))
    else:
        print(_render_text_result(solution))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
