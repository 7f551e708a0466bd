"""
Urgency Scorer.

score = color_rank * 3.0 + readiness_weight + overdue_bonus + deadline_bonus

Scores are unbounded and only meaningful for relative ordering. Equal
scores are ordered by ascending spot id so rankings are deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from spot_scheduler.core.models import ProjectDeadline, ReadinessLevel, SpotRecord
from spot_scheduler.scheduling.deadline_pressure import deadline_bonus

COLOR_WEIGHT_MULTIPLIER = 3.0
OVERDUE_BONUS_PER_DAY = 0.2

READINESS_WEIGHTS: dict[ReadinessLevel, float] = {
    ReadinessLevel.NEW: 3.0,
    ReadinessLevel.LEARNING: 2.5,
    ReadinessLevel.REVIEW: 1.5,
    ReadinessLevel.MASTERED: 1.0,
}


class UrgencyScorer:
    """Combines color, readiness, lateness and deadline into one score."""

    def score(
        self,
        spot: SpotRecord,
        deadline: ProjectDeadline | datetime | None,
        now: datetime,
    ) -> float:
        color_weight = spot.color.priority * COLOR_WEIGHT_MULTIPLIER
        readiness_weight = READINESS_WEIGHTS[spot.readiness_level]
        overdue = spot.days_overdue(now) * OVERDUE_BONUS_PER_DAY
        return color_weight + readiness_weight + overdue + deadline_bonus(deadline, now)

    def rank(
        self,
        spots: Iterable[SpotRecord],
        deadline: ProjectDeadline | datetime | None,
        now: datetime,
    ) -> list[SpotRecord]:
        """Spots sorted by descending urgency."""
        return rank_by(spots, lambda s: self.score(s, deadline, now))


def rank_by(spots: Iterable[SpotRecord], key: Callable[[SpotRecord], float]) -> list[SpotRecord]:
    """Sort descending by ``key``; ties go to the lower spot id."""
    return sorted(spots, key=lambda s: (-key(s), s.id))
