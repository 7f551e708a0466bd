"""
SM-2 Derived SRS Update Engine for Practice Spots.

Implements:
- SM-2 ease/interval/repetition update
- Reliability adjustment from the spot's success rate
- Immediate retry after a failed attempt
- Deadline pressure (see deadline_pressure.py)
- Sleep gate (no reviews scheduled during quiet hours)

Outcome -> quality mapping:
    failed     1.0
    struggled  2.5
    good       4.0
    excellent  5.0
Quality >= 3.0 counts as a success.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from loguru import logger

from spot_scheduler.config import SchedulerSettings, get_settings
from spot_scheduler.core.models import (
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    OutcomeRecord,
    PracticeOutcome,
    ProjectDeadline,
    SpotRecord,
    normalize_spot,
)
from spot_scheduler.scheduling.deadline_pressure import DeadlinePressureModel
from spot_scheduler.scheduling.readiness import transition

SUCCESS_QUALITY = 3.0
MAX_QUALITY = 5.0
FAILURE_EASE_PENALTY = 0.2

FIRST_INTERVAL = 1  # Days after the first success
SECOND_INTERVAL = 6  # Days after the second success
MIN_INTERVAL_DAYS = 1


def clamp_ease(ease: float) -> float:
    return max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, ease))


def ease_delta(quality: float) -> float:
    """SM-2 ease change: EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))."""
    miss = MAX_QUALITY - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


@dataclass(frozen=True)
class SRSStep:
    """Pure SM-2 result before pressure and gating are applied."""

    quality: float
    successful: bool
    ease_factor: float
    interval: int
    repetitions: int


class SRSEngine:
    """
    Computes the next SRS state of a spot after a practice attempt.

    The engine holds configuration only; every call is a pure function of
    its arguments and returns a new SpotRecord.
    """

    def __init__(self, settings: SchedulerSettings | None = None):
        """
        Initialize the engine.

        Args:
            settings: Scheduler settings (uses get_settings() if None)
        """
        self.settings = settings or get_settings()
        self.pressure = DeadlinePressureModel(self.settings.profile)

    def adjusted_quality(self, spot: SpotRecord, outcome: PracticeOutcome) -> float:
        """
        Map an outcome to quality, then adjust by the spot's reliability.

        Spots with no practice history carry no reliability signal and keep
        the raw quality.
        """
        quality = outcome.quality
        if spot.practice_count > 0:
            rate = spot.success_rate
            if rate < self.settings.low_reliability_threshold:
                quality *= self.settings.low_reliability_factor
            elif rate > self.settings.high_reliability_threshold:
                quality *= self.settings.high_reliability_factor
        return max(0.0, min(MAX_QUALITY, quality))

    def step(self, spot: SpotRecord, outcome: PracticeOutcome) -> SRSStep:
        """Run the SM-2 part of the update (ease, interval, repetitions)."""
        quality = self.adjusted_quality(spot, outcome)

        if quality >= SUCCESS_QUALITY:
            new_ease = clamp_ease(spot.ease_factor + ease_delta(quality))
            repetitions = spot.repetitions + 1
            if repetitions == 1:
                interval = FIRST_INTERVAL
            elif repetitions == 2:
                interval = SECOND_INTERVAL
            else:
                interval = round(spot.interval * new_ease)
            return SRSStep(
                quality=quality,
                successful=True,
                ease_factor=new_ease,
                interval=max(MIN_INTERVAL_DAYS, interval),
                repetitions=repetitions,
            )

        return SRSStep(
            quality=quality,
            successful=False,
            ease_factor=clamp_ease(spot.ease_factor - FAILURE_EASE_PENALTY),
            interval=FIRST_INTERVAL,
            repetitions=0,
        )

    def apply_sleep_gate(self, scheduled: datetime) -> datetime:
        """Move reviews that land in quiet hours to the next morning."""
        s = self.settings
        morning = {"hour": s.morning_hour, "minute": 0, "second": 0, "microsecond": 0}
        if scheduled.hour >= s.sleep_gate_hour:
            return (scheduled + timedelta(days=1)).replace(**morning)
        if scheduled.hour < s.wake_gate_hour:
            return scheduled.replace(**morning)
        return scheduled

    def update(
        self,
        spot: SpotRecord,
        outcome: PracticeOutcome,
        now: datetime,
        deadline: ProjectDeadline | datetime | None = None,
        minutes_spent: int | None = None,
    ) -> SpotRecord:
        """
        Apply one practice outcome to a spot.

        Args:
            spot: Current spot record (normalized before use)
            outcome: Practice outcome
            now: Time of the attempt
            deadline: Optional project deadline for interval compression
            minutes_spent: Minutes logged in history (defaults to the
                spot's recommended time)

        Returns:
            Updated SpotRecord
        """
        outcome = PracticeOutcome(outcome)
        spot = normalize_spot(spot)
        result = self.step(spot, outcome)

        if outcome == PracticeOutcome.FAILED:
            interval = result.interval
            next_due = now + self.settings.retry_lag
            if self.settings.gate_retries:
                next_due = self.apply_sleep_gate(next_due)
        else:
            # Pressure uses the color the spot had when it was practised
            scaled_days = self.pressure.scale(result.interval, spot.color, deadline, now)
            interval = max(MIN_INTERVAL_DAYS, round(scaled_days))
            next_due = self.apply_sleep_gate(now + timedelta(days=scaled_days))

        practice_count = spot.practice_count + 1
        success_count = spot.success_count + (1 if result.successful else 0)
        failure_count = spot.failure_count + (0 if result.successful else 1)

        state = transition(
            level=spot.readiness_level,
            priority=spot.priority,
            outcome=outcome,
            repetitions=result.repetitions,
            success_rate=success_count / practice_count,
        )

        record = OutcomeRecord(
            timestamp=now,
            outcome=outcome,
            minutes_spent=spot.recommended_time if minutes_spent is None else minutes_spent,
        )

        updated = replace(
            spot,
            ease_factor=result.ease_factor,
            interval=interval,
            repetitions=result.repetitions,
            next_due=next_due,
            last_practiced=now,
            practice_count=practice_count,
            success_count=success_count,
            failure_count=failure_count,
            readiness_level=state.level,
            color=state.color,
            last_outcome=outcome,
            history=spot.history + (record,),
        )

        logger.debug(
            f"SRS update for {spot.id}: outcome={outcome.value}, q={result.quality:.2f}, "
            f"ease={spot.ease_factor:.2f}->{updated.ease_factor:.2f}, "
            f"interval={interval}d, reps={updated.repetitions}, next_due={next_due:%Y-%m-%d %H:%M}, "
            f"readiness={updated.readiness_level.value}, color={updated.color.value}"
        )

        return updated
