"""
Performance readiness scoring for a set of spots.

A 0-100 score for how close a piece (its spots) is to being performance
ready, and an estimate of the practice time needed to reach a target score.

Spot readiness:
    base = success rate, blended 60/40 with the last five outcomes
    x consistency (low variance over the last ten outcomes)
    x overdue penalty (1% per hour, floor 0.5)
    x difficulty multiplier (easy spots count more)

Set score = color-weighted mean of spot readiness
    x practice time bonus (up to +30%)
    x recent practice days (0.7 .. 1.3 over the last week)
    x deadline pressure (0.5 past, 0.7 within a week, 0.85 within a month)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from loguru import logger

from spot_scheduler.core.models import (
    ProjectDeadline,
    SpotColor,
    SpotRecord,
    as_deadline,
    days_between,
)

DEFAULT_TARGET_SCORE = 85.0
NO_DEADLINE_DAYS = 365

COLOR_WEIGHTS = {
    SpotColor.RED: 1.0,
    SpotColor.YELLOW: 0.7,
    SpotColor.GREEN: 0.4,
    SpotColor.BLUE: 0.2,
}

DIFFICULTY_MULTIPLIERS = {1: 1.2, 2: 1.1, 3: 1.0, 4: 0.9, 5: 0.8}
MINUTES_PER_POINT = {1: 1.0, 2: 1.5, 3: 2.0, 4: 3.0, 5: 4.0}

RECENT_OUTCOMES = 5
CONSISTENCY_OUTCOMES = 10
RECENT_DAYS = 7


class ReadinessBand(str, Enum):
    """Performance readiness band for a score."""

    NOT_READY = "not_ready"
    LEARNING = "learning"
    PRACTICING = "practicing"
    POLISHING = "polishing"
    PERFORMANCE_READY = "performance_ready"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


def readiness_band(score: float) -> ReadinessBand:
    if score >= 90:
        return ReadinessBand.PERFORMANCE_READY
    if score >= 75:
        return ReadinessBand.POLISHING
    if score >= 50:
        return ReadinessBand.PRACTICING
    if score >= 25:
        return ReadinessBand.LEARNING
    return ReadinessBand.NOT_READY


def _consistency_multiplier(spot: SpotRecord) -> float:
    if len(spot.history) < 3:
        return 1.0
    results = [1.0 if h.outcome.is_success else 0.0 for h in spot.history[-CONSISTENCY_OUTCOMES:]]
    mean = sum(results) / len(results)
    variance = sum((x - mean) ** 2 for x in results) / len(results)
    return max(0.8, 1.0 - variance * 0.3)


def spot_readiness(spot: SpotRecord, now: datetime) -> float:
    """Readiness of a single spot (not clamped; easy spots may exceed 100)."""
    base = spot.success_rate * 100.0
    if len(spot.history) >= 3:
        recent = spot.history[-RECENT_OUTCOMES:]
        recent_rate = sum(1 for h in recent if h.outcome.is_success) / len(recent)
        base = base * 0.6 + recent_rate * 100.0 * 0.4

    hours_overdue = spot.days_overdue(now) * 24
    overdue = max(0.5, 1.0 - hours_overdue * 0.01)

    return (
        base
        * _consistency_multiplier(spot)
        * overdue
        * DIFFICULTY_MULTIPLIERS.get(spot.difficulty, 1.0)
    )


def recent_practice_multiplier(spots: list[SpotRecord], now: datetime) -> float:
    """0.7 with no practice in the last week, up to 1.3 with practice every day."""
    start = now - timedelta(days=RECENT_DAYS)
    days = {
        h.timestamp.date()
        for s in spots
        for h in s.history
        if days_between(h.timestamp, start) > 0 and days_between(now, h.timestamp) >= 0
    }
    return 0.7 + min(len(days), RECENT_DAYS) / RECENT_DAYS * 0.6


def _practice_multiplier(spots: list[SpotRecord]) -> float:
    hours = sum(h.minutes_spent for s in spots for h in s.history) / 60.0
    return 1.0 + min(100.0, hours * 15.0) / 100.0 * 0.3


def _pressure_multiplier(deadline: ProjectDeadline | None, now: datetime) -> float:
    if deadline is None:
        return 1.0
    days = int(deadline.days_until(now))
    if days <= 0:
        return 0.5
    if days <= 7:
        return 0.7
    if days <= 30:
        return 0.85
    return 1.0


def readiness_score(
    spots: list[SpotRecord],
    now: datetime,
    deadline: ProjectDeadline | datetime | None = None,
) -> float:
    """Overall 0-100 readiness of a set of spots. An empty set scores 0."""
    active = [s for s in spots if s.is_active]
    if not active:
        return 0.0

    weight_sum = sum(COLOR_WEIGHTS[s.color] for s in active)
    spot_score = sum(spot_readiness(s, now) * COLOR_WEIGHTS[s.color] for s in active) / weight_sum

    score = (
        spot_score
        * _practice_multiplier(active)
        * recent_practice_multiplier(active, now)
        * _pressure_multiplier(as_deadline(deadline), now)
    )
    return max(0.0, min(100.0, score))


def _set_difficulty(spots: list[SpotRecord]) -> int:
    active = [s for s in spots if s.is_active]
    if not active:
        return 3
    return round(sum(s.difficulty for s in active) / len(active))


def time_to_readiness(
    spots: list[SpotRecord],
    now: datetime,
    target_score: float = DEFAULT_TARGET_SCORE,
) -> timedelta:
    """
    Practice time needed to lift the set to ``target_score``.

    Measured without deadline pressure. Each missing point costs 1-4 minutes
    by difficulty, half again as much once the score is above 50.
    """
    current = readiness_score(spots, now)
    if current >= target_score:
        return timedelta(0)

    minutes_per_point = MINUTES_PER_POINT.get(_set_difficulty(spots), 2.0)
    if current > 50:
        minutes_per_point *= 1.5
    return timedelta(minutes=round((target_score - current) * minutes_per_point))


@dataclass
class ReadinessReport:
    """Readiness of a set of spots against a project deadline."""

    score: float
    band: ReadinessBand
    time_needed: timedelta
    days_available: int
    feasible: bool


def assess_readiness(
    spots: list[SpotRecord],
    now: datetime,
    deadline: ProjectDeadline | datetime | None = None,
    daily_minutes: float | None = None,
    target_score: float = DEFAULT_TARGET_SCORE,
) -> ReadinessReport:
    """
    Score the set and check whether the remaining work fits before the deadline.

    Daily time comes from ``daily_minutes``, else the deadline's
    ``daily_available_minutes``. Without a deadline a year is assumed.
    """
    deadline = as_deadline(deadline)
    score = readiness_score(spots, now, deadline)
    needed = time_to_readiness(spots, now, target_score)

    days = int(deadline.days_until(now)) if deadline is not None else NO_DEADLINE_DAYS
    if daily_minutes is None:
        daily_minutes = (deadline.daily_available_minutes if deadline is not None else None) or 0
    available = timedelta(minutes=daily_minutes * max(days, 0))

    report = ReadinessReport(
        score=score,
        band=readiness_band(score),
        time_needed=needed,
        days_available=days,
        feasible=needed <= available,
    )
    logger.debug(
        f"Readiness {score:.1f} ({report.band.value}), "
        f"needs {needed} over {days} days, feasible={report.feasible}"
    )
    return report
