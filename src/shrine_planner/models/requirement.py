"""Desired stat values and the shrine phase they must hold in."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Condition(str, Enum):
    """When a requirement must be met relative to the shrine."""
    PRE = "pre"     # before averaging
    POST = "post"   # after averaging (and any post-shrine top-up)
    ANY = "any"     # either phase; the optimizer decides

    @classmethod
    def parse(cls, raw: Any) -> Condition:
        if isinstance(raw, Condition):
            return raw
        if isinstance(raw, str):
            text = raw.strip().lower()
            for member in cls:
                if member.value == text:
                    return member
        valid = ", ".join(repr(m.value) for m in cls)
        raise ValueError(f"Unknown condition {raw!r} (expected one of {valid})")


@dataclass(frozen=True, slots=True)
class Requirement:
    """A minimum value for one stat, tagged with its shrine phase."""
    value: int
    condition: Condition = Condition.ANY


def requirement_from_raw(stat: str, entry: Any) -> Requirement:
    """Coerce one requirement entry, raising ValueError on bad input.

    Accepts a Requirement or a mapping with ``value`` and optional
    ``condition`` (default "any").
    """
    if isinstance(entry, Requirement):
        value, raw_condition = entry.value, entry.condition
    elif isinstance(entry, Mapping):
        if "value" not in entry:
            raise ValueError(f"{stat}: requirement {dict(entry)!r} has no value")
        value, raw_condition = entry["value"], entry.get("condition", Condition.ANY)
    else:
        raise ValueError(f"{stat}: expected a requirement object, got {entry!r}")

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{stat}: requirement value must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{stat}: requirement value must be positive, got {value}")
    try:
        condition = Condition.parse(raw_condition)
    except ValueError as exc:
        raise ValueError(f"{stat}: {exc}") from None
    return Requirement(value=value, condition=condition)


def validate_desired_stats(desired: Mapping[str, Any]) -> dict[str, list[Requirement]]:
    """Validate raw desired stats into typed requirements, keeping input order."""
    if not isinstance(desired, Mapping):
        raise ValueError(f"Desired stats must be a mapping, got {type(desired).__name__}")
    validated: dict[str, list[Requirement]] = {}
    for stat, entries in desired.items():
        if not isinstance(stat, str) or not stat.strip():
            raise ValueError(f"Stat names must be non-empty strings, got {stat!r}")
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            raise ValueError(f"{stat}: requirements must be a list, got {entries!r}")
        validated[stat] = [requirement_from_raw(stat, entry) for entry in entries]
    return validated
