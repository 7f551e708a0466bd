"""
Deadline Pressure Model.

Compresses review intervals as a linked project deadline (e.g. a concert)
approaches, and provides the matching additive bonus used for urgency
scoring.

Pressure ladder (days until deadline -> interval multiplier):
    <= 3   0.3   (3x more frequent)
    <= 7   0.5
    <= 14  0.7
    <= 30  0.85
    else   1.0
Red spots get an extra 0.8x on top.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from spot_scheduler.core.models import (
    SECONDS_PER_DAY,
    ProjectDeadline,
    SpotColor,
    SRSProfile,
    as_deadline,
)

PRESSURE_LADDER: list[tuple[float, float]] = [
    (3, 0.3),
    (7, 0.5),
    (14, 0.7),
    (30, 0.85),
]

BONUS_LADDER: list[tuple[float, float]] = [
    (3, 0.9),
    (7, 0.6),
    (14, 0.3),
]

RED_PRESSURE_FACTOR = 0.8


def _days_until(deadline: ProjectDeadline | datetime | None, now: datetime) -> float | None:
    """Days left, or None when there is no deadline or it has passed."""
    deadline = as_deadline(deadline)
    if deadline is None:
        return None
    days = deadline.days_until(now)
    if days <= 0:
        return None
    return days


class DeadlinePressureModel:
    """Scales intervals by proximity to a project deadline."""

    def __init__(self, profile: SRSProfile = SRSProfile.STANDARD):
        self.profile = profile

    def multiplier(
        self,
        color: SpotColor,
        deadline: ProjectDeadline | datetime | None,
        now: datetime,
    ) -> float:
        """Interval multiplier for a spot of ``color`` (1.0 = no pressure)."""
        days = _days_until(deadline, now)
        if days is None:
            return 1.0

        factor = 1.0
        for limit, value in PRESSURE_LADDER:
            if days <= limit:
                factor = value
                break

        if color == SpotColor.RED:
            factor *= RED_PRESSURE_FACTOR
        return factor

    def scale(
        self,
        base_interval: float,
        color: SpotColor,
        deadline: ProjectDeadline | datetime | None,
        now: datetime,
    ) -> float:
        """
        Scale an interval (in days) by deadline pressure.

        With no deadline, or a deadline already passed, the interval is
        returned unchanged. Otherwise the scaled interval is floored at the
        profile's minimum interval.
        """
        if _days_until(deadline, now) is None:
            return float(base_interval)
        scaled = base_interval * self.multiplier(color, deadline, now)
        return max(scaled, self.profile.minimum_interval_days)

    def scale_duration(
        self,
        base: timedelta,
        color: SpotColor,
        deadline: ProjectDeadline | datetime | None,
        now: datetime,
    ) -> timedelta:
        days = self.scale(base.total_seconds() / SECONDS_PER_DAY, color, deadline, now)
        return timedelta(days=days)


def deadline_bonus(deadline: ProjectDeadline | datetime | None, now: datetime) -> float:
    """Additive urgency bonus for an approaching deadline (0.9 / 0.6 / 0.3 / 0)."""
    days = _days_until(deadline, now)
    if days is None:
        return 0.0
    for limit, bonus in BONUS_LADDER:
        if days <= limit:
            return bonus
    return 0.0
