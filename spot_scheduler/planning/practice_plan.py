"""
Practice plan suggestions for a project.

Splits the daily practice time across red / yellow / green spots according
to how close the project deadline is, checks whether the remaining work fits
before the deadline, and produces short recommendations.

Time split by days left:
    <= 7 days   70% / 25% / 5%   (concert mode)
    <= 30 days  50% / 35% / 15%  (preparation)
    otherwise   40% / 40% / 20%  (learning)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from spot_scheduler.config import get_settings
from spot_scheduler.core.models import ProjectDeadline, SpotColor, SpotRecord, as_deadline

NO_DEADLINE_DAYS = 365
UTILIZATION = 0.8  # Share of available time realistically usable
MANY_RED_SPOTS = 10

MSG_MANY_RED = "High number of critical spots detected. Consider extending daily practice time."
MSG_DEADLINE_CLOSE = "Concert approaching! Focus primarily on critical (red) spots."
MSG_PROMOTE_YELLOW = "Many practice spots could be promoted to maintenance with consistent work."
MSG_INFEASIBLE = (
    "Current practice goal may not be sufficient for concert readiness. "
    "Consider increasing daily time or reducing piece difficulty."
)


@dataclass
class PracticePlan:
    """Suggested daily allocation for a project."""

    feasible: bool
    red_minutes: int = 0
    yellow_minutes: int = 0
    green_minutes: int = 0
    total_estimated_minutes: int = 0
    days_available: float = NO_DEADLINE_DAYS
    recommendations: list[str] = field(default_factory=list)


def _split_ratios(days: float) -> tuple[float, float, float]:
    if days <= 7:
        return 0.7, 0.25, 0.05
    if days <= 30:
        return 0.5, 0.35, 0.15
    return 0.4, 0.4, 0.2


def suggest_practice_plan(
    spots: list[SpotRecord],
    now: datetime,
    deadline: ProjectDeadline | datetime | None = None,
    daily_minutes: float | None = None,
) -> PracticePlan:
    """
    Suggest how to spend daily practice time on a project's spots.

    Args:
        spots: Spots belonging to the project
        now: Current time
        deadline: Project deadline (a passed deadline counts as none)
        daily_minutes: Daily practice time; falls back to the deadline's
            daily_available_minutes, then settings.default_session_minutes

    Returns:
        PracticePlan
    """
    deadline = as_deadline(deadline)
    days = NO_DEADLINE_DAYS
    if deadline is not None and deadline.days_until(now) > 0:
        days = deadline.days_until(now)

    if daily_minutes is None and deadline is not None:
        daily_minutes = deadline.daily_available_minutes
    if daily_minutes is None:
        daily_minutes = get_settings().default_session_minutes

    if not spots:
        return PracticePlan(feasible=True, days_available=days)

    red = [s for s in spots if s.color == SpotColor.RED]
    yellow = [s for s in spots if s.color == SpotColor.YELLOW]

    red_ratio, yellow_ratio, green_ratio = _split_ratios(days)

    recommendations: list[str] = []
    if len(red) > MANY_RED_SPOTS:
        recommendations.append(MSG_MANY_RED)
    if days <= 14 and red:
        recommendations.append(MSG_DEADLINE_CLOSE)
    if len(yellow) > len(red) * 2:
        recommendations.append(MSG_PROMOTE_YELLOW)

    needed = sum(s.recommended_time for s in red + yellow)
    feasible = needed <= daily_minutes * days * UTILIZATION
    if not feasible:
        recommendations.append(MSG_INFEASIBLE)

    logger.debug(
        f"Practice plan: {len(spots)} spots, {days:.1f} days left, "
        f"{needed} min needed, {daily_minutes:g} min/day, feasible={feasible}"
    )

    return PracticePlan(
        feasible=feasible,
        red_minutes=round(daily_minutes * red_ratio),
        yellow_minutes=round(daily_minutes * yellow_ratio),
        green_minutes=round(daily_minutes * green_ratio),
        total_estimated_minutes=needed,
        days_available=days,
        recommendations=recommendations,
    )
