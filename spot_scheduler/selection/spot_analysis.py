"""
Learner and spot analysis for smart session selection.

Smart mode blends normalized urgency with four signals computed once per
selection call:
- learning efficiency: how much a practice attempt is likely to move the spot
- retention risk: forgetting-curve estimate, R = e^(-t / (ease * 2))
- musical difficulty: recommended time, page position, technique keywords
- confidence: how much practice data backs the estimate

overall = 0.3*urgency + 0.25*efficiency + 0.25*risk + 0.1*difficulty + 0.1*confidence
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime

from spot_scheduler.core.models import ReadinessLevel, SpotColor, SpotRecord

URGENCY_WEIGHT = 0.3
EFFICIENCY_WEIGHT = 0.25
RETENTION_WEIGHT = 0.25
DIFFICULTY_WEIGHT = 0.1
CONFIDENCE_WEIGHT = 0.1

NEVER_PRACTICED_RISK = 0.8
POOR_RETENTION_FACTOR = 1.3

# Words in a spot title that usually mean harder passage work
TECHNIQUE_KEYWORDS: dict[str, float] = {
    "triplet": 0.3,
    "chromatic": 0.4,
    "octave": 0.3,
    "trill": 0.2,
    "cadenza": 0.5,
    "presto": 0.4,
    "fortissimo": 0.2,
}

READINESS_EFFICIENCY: dict[ReadinessLevel, float] = {
    ReadinessLevel.NEW: 0.7,
    ReadinessLevel.LEARNING: 0.6,  # 0.8 for quick learners
    ReadinessLevel.REVIEW: 0.5,
    ReadinessLevel.MASTERED: 0.2,
}


def expected_retention(days_since_practice: float, ease_factor: float) -> float:
    """Forgetting curve with strength = ease * 2."""
    strength = max(ease_factor, 0.1) * 2.0
    return math.exp(-max(0.0, days_since_practice) / strength)


@dataclass
class PracticeProfile:
    """Learner-level summary derived from the candidate pool."""

    overall_success_rate: float = 0.6
    retention_rate: float = 0.7
    total_spots_practiced: int = 0
    color_success_rates: dict[SpotColor, float] = field(default_factory=dict)

    @property
    def is_quick_learner(self) -> bool:
        return self.overall_success_rate > 0.7

    @property
    def has_good_retention(self) -> bool:
        return self.retention_rate > 0.6

    @classmethod
    def from_spots(cls, spots: list[SpotRecord], now: datetime) -> PracticeProfile:
        practiced = [s for s in spots if s.practice_count > 0]
        if not practiced:
            return cls()

        success_total = 0.0
        retention_total = 0.0
        by_color: dict[SpotColor, list[float]] = {}

        for spot in practiced:
            rate = spot.success_rate
            success_total += rate
            by_color.setdefault(spot.color, []).append(rate)
            days = spot.days_since_practice(now)
            if days is not None:
                retention_total += expected_retention(days, spot.ease_factor)

        return cls(
            overall_success_rate=success_total / len(practiced),
            retention_rate=retention_total / len(practiced),
            total_spots_practiced=len(practiced),
            color_success_rates={c: sum(r) / len(r) for c, r in by_color.items()},
        )


@dataclass
class SpotAnalysis:
    """Smart-mode signals for one spot (all in 0-1)."""

    spot: SpotRecord
    urgency: float
    learning_efficiency: float
    retention_risk: float
    difficulty: float
    confidence: float

    @property
    def overall_priority(self) -> float:
        return (
            self.urgency * URGENCY_WEIGHT
            + self.learning_efficiency * EFFICIENCY_WEIGHT
            + self.retention_risk * RETENTION_WEIGHT
            + self.difficulty * DIFFICULTY_WEIGHT
            + self.confidence * CONFIDENCE_WEIGHT
        )


def learning_efficiency(spot: SpotRecord, profile: PracticeProfile) -> float:
    efficiency = profile.color_success_rates.get(spot.color, 0.5) * 0.4
    if spot.readiness_level == ReadinessLevel.LEARNING and profile.is_quick_learner:
        efficiency += 0.8
    else:
        efficiency += READINESS_EFFICIENCY[spot.readiness_level]
    if spot.ease_factor < 2.0:
        efficiency += 0.3  # Struggling spots need attention
    return min(efficiency, 1.0)


def retention_risk(spot: SpotRecord, profile: PracticeProfile, now: datetime) -> float:
    days = spot.days_since_practice(now)
    if days is None:
        return NEVER_PRACTICED_RISK
    risk = 1.0 - expected_retention(days, spot.ease_factor)
    if not profile.has_good_retention:
        risk *= POOR_RETENTION_FACTOR
    return min(risk, 1.0)


def musical_difficulty(spot: SpotRecord) -> float:
    difficulty = spot.recommended_time / 20.0
    title = spot.title.lower()
    difficulty += sum(bonus for word, bonus in TECHNIQUE_KEYWORDS.items() if word in title)
    difficulty += spot.page_number / 100.0
    return min(max(difficulty, 0.0), 1.0)


def analysis_confidence(spot: SpotRecord, profile: PracticeProfile) -> float:
    confidence = 0.5
    confidence += min(spot.practice_count / 10.0, 0.3)
    confidence += min(profile.total_spots_practiced / 50.0, 0.2)
    return min(confidence, 1.0)


def analyze_spots(
    spots: list[SpotRecord],
    urgency_scores: dict[str, float],
    now: datetime,
) -> list[SpotAnalysis]:
    """
    Build smart-mode analyses for a pool.

    Args:
        spots: Candidate pool
        urgency_scores: Raw urgency score per spot id
        now: Current time

    Returns:
        One SpotAnalysis per spot, in input order
    """
    profile = PracticeProfile.from_spots(spots, now)
    max_score = max(urgency_scores.values(), default=0.0)

    analyses = []
    for spot in spots:
        raw = urgency_scores.get(spot.id, 0.0)
        analyses.append(
            SpotAnalysis(
                spot=spot,
                urgency=raw / max_score if max_score > 0 else 0.0,
                learning_efficiency=learning_efficiency(spot, profile),
                retention_risk=retention_risk(spot, profile, now),
                difficulty=musical_difficulty(spot),
                confidence=analysis_confidence(spot, profile),
            )
        )
    return analyses
