"""
Practice statistics and attention flags over a set of spots.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from spot_scheduler.core.models import ProjectDeadline, ReadinessLevel, SpotRecord, days_between
from spot_scheduler.selection.urgency import UrgencyScorer

OVERDUE_GRACE_DAYS = 2
STRUGGLING_MIN_ATTEMPTS = 5
STRUGGLING_RATE = 0.4
NEGLECTED_LEARNING_DAYS = 7

DAILY_SPOT_LIMIT = 15
DAILY_BUFFER = 1.2  # Breaks and transitions


@dataclass
class PracticeStats:
    """Summary counts for a set of spots."""

    total_spots: int
    due_spots: int
    mastered_spots: int
    learning_spots: int
    weekly_practice_minutes: int
    weekly_session_count: int


def practice_stats(spots: list[SpotRecord], now: datetime) -> PracticeStats:
    week_ago = now - timedelta(days=7)
    recent = [
        h for s in spots for h in s.history if days_between(h.timestamp, week_ago) > 0
    ]
    return PracticeStats(
        total_spots=len(spots),
        due_spots=sum(1 for s in spots if s.is_due(now)),
        mastered_spots=sum(1 for s in spots if s.readiness_level == ReadinessLevel.MASTERED),
        learning_spots=sum(1 for s in spots if s.readiness_level == ReadinessLevel.LEARNING),
        weekly_practice_minutes=sum(h.minutes_spent for h in recent),
        weekly_session_count=len(recent),
    )


def needs_attention(spot: SpotRecord, now: datetime) -> bool:
    """
    Flag spots that slipped through the regular schedule.

    - overdue by more than two days
    - struggling: more than five attempts with under 40% success
    - learning spots untouched for over a week
    """
    if spot.days_overdue(now) > OVERDUE_GRACE_DAYS:
        return True
    if spot.practice_count > STRUGGLING_MIN_ATTEMPTS and spot.success_rate < STRUGGLING_RATE:
        return True
    if spot.readiness_level == ReadinessLevel.LEARNING:
        days = spot.days_since_practice(now)
        if days is not None and days > NEGLECTED_LEARNING_DAYS:
            return True
    return False


def urgent_spots(spots: list[SpotRecord], now: datetime) -> list[SpotRecord]:
    return [s for s in spots if s.is_active and needs_attention(s, now)]


def recommended_daily_minutes(
    spots: list[SpotRecord],
    now: datetime,
    deadline: ProjectDeadline | datetime | None = None,
) -> int:
    """Recommended time of the 15 most urgent due spots, plus 20% buffer."""
    due = [s for s in spots if s.is_active and s.is_due(now)]
    top = UrgencyScorer().rank(due, deadline, now)[:DAILY_SPOT_LIMIT]
    return round(sum(s.recommended_time for s in top) * DAILY_BUFFER)
