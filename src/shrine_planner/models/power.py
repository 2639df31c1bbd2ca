"""Build power derived from total points spent."""

from shrine_planner.models.constants import MAX_POWER, POINTS_PER_POWER, POWER_POINT_OFFSET


def power_for_points(points: int) -> int:
    """Power level reached after spending *points* (0..MAX_POWER)."""
    power = (points - POWER_POINT_OFFSET) // POINTS_PER_POWER
    return max(0, min(MAX_POWER, power))
