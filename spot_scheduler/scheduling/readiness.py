"""
Readiness / Color State Machine.

Derives a spot's readiness level and display color after each practice
outcome, from the updated SRS counters.

Rules:
- failed     -> learning, red (always wins over any promotion)
- struggled  -> review/mastered demote to learning; color yellow
- good/excellent promote one step when thresholds are met:
    new      -> learning  at repetitions >= 2
    learning -> review    at repetitions >= 5, or rate >= 0.7 and repetitions >= 3
    review   -> mastered  at repetitions >= 10, or rate >= 0.9 and repetitions >= 5
  color is green once mastered with low priority, otherwise yellow
"""

from __future__ import annotations

from dataclasses import dataclass

from spot_scheduler.core.models import (
    PracticeOutcome,
    ReadinessLevel,
    SpotColor,
    SpotPriority,
    SpotRecord,
)

RECENT_WINDOW = 5
MIN_HISTORY_FOR_SUGGESTION = 3


@dataclass(frozen=True)
class ReadinessState:
    """Result of a state machine step."""

    level: ReadinessLevel
    color: SpotColor


def _promote(level: ReadinessLevel, repetitions: int, success_rate: float) -> ReadinessLevel:
    if level == ReadinessLevel.NEW:
        return ReadinessLevel.LEARNING if repetitions >= 2 else level
    if level == ReadinessLevel.LEARNING:
        if repetitions >= 5 or (success_rate >= 0.7 and repetitions >= 3):
            return ReadinessLevel.REVIEW
        return level
    if level == ReadinessLevel.REVIEW:
        if repetitions >= 10 or (success_rate >= 0.9 and repetitions >= 5):
            return ReadinessLevel.MASTERED
        return level
    return level


def transition(
    level: ReadinessLevel,
    priority: SpotPriority,
    outcome: PracticeOutcome,
    repetitions: int,
    success_rate: float,
) -> ReadinessState:
    """
    Compute the next readiness level and color.

    Args:
        level: Current readiness level
        priority: Owner-assigned priority
        outcome: Latest practice outcome
        repetitions: Repetition count after the SRS update
        success_rate: Success rate after the SRS update

    Returns:
        ReadinessState with the new level and color
    """
    if outcome == PracticeOutcome.FAILED:
        return ReadinessState(ReadinessLevel.LEARNING, SpotColor.RED)

    if outcome == PracticeOutcome.STRUGGLED:
        if level in (ReadinessLevel.REVIEW, ReadinessLevel.MASTERED):
            level = ReadinessLevel.LEARNING
        return ReadinessState(level, SpotColor.YELLOW)

    new_level = _promote(level, repetitions, success_rate)
    if new_level == ReadinessLevel.MASTERED and priority == SpotPriority.LOW:
        new_color = SpotColor.GREEN
    else:
        new_color = SpotColor.YELLOW
    return ReadinessState(new_level, new_color)


_PROMOTE_COLOR = {
    SpotColor.RED: SpotColor.YELLOW,
    SpotColor.YELLOW: SpotColor.GREEN,
    SpotColor.GREEN: SpotColor.GREEN,
    SpotColor.BLUE: SpotColor.GREEN,
}

_DEMOTE_COLOR = {
    SpotColor.GREEN: SpotColor.YELLOW,
    SpotColor.YELLOW: SpotColor.RED,
    SpotColor.RED: SpotColor.RED,
    SpotColor.BLUE: SpotColor.YELLOW,
}


def suggest_color(spot: SpotRecord) -> SpotColor:
    """
    Suggest a recolor from recent history.

    Looks at the last five outcomes (at least three are needed). A success
    rate of 80%+ with no failures promotes one color; a rate of 40% or less,
    or two failures, demotes one color.
    """
    if len(spot.history) < MIN_HISTORY_FOR_SUGGESTION:
        return spot.color

    recent = spot.history[-RECENT_WINDOW:]
    successes = sum(1 for h in recent if h.outcome.is_success)
    failures = sum(1 for h in recent if h.outcome == PracticeOutcome.FAILED)
    rate = successes / len(recent)

    if rate >= 0.8 and failures == 0:
        return _PROMOTE_COLOR[spot.color]
    if rate <= 0.4 or failures >= 2:
        return _DEMOTE_COLOR[spot.color]
    return spot.color
