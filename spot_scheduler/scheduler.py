"""
Spot Scheduler API.

Stateless facade over the engine, scorer and selector. Settings and the
clock are injected; nothing here reads global state beyond
``get_settings()`` when no settings are passed.

    scheduler = SpotScheduler(clock=FixedClock(now))
    updated = scheduler.record_outcome(spot, PracticeOutcome.GOOD)
    session = scheduler.build_session(spots, budget=30, mode="smart")
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from spot_scheduler.config import SchedulerSettings, get_settings
from spot_scheduler.core.clock import Clock, SystemClock
from spot_scheduler.core.models import PracticeOutcome, ProjectDeadline, SpotRecord
from spot_scheduler.scheduling.srs_engine import SRSEngine
from spot_scheduler.selection.session_selector import SessionMode, SessionPlan, SessionSelector
from spot_scheduler.selection.urgency import UrgencyScorer


class SpotScheduler:
    """Public scheduling operations for practice spots."""

    def __init__(
        self,
        settings: SchedulerSettings | None = None,
        clock: Clock | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            settings: Scheduler settings (uses get_settings() if None)
            clock: Time source (SystemClock if None)
        """
        self.settings = settings or get_settings()
        self.clock = clock or SystemClock()
        self.engine = SRSEngine(self.settings)
        self.scorer = UrgencyScorer()
        self.selector = SessionSelector(self.settings, self.scorer)

    def record_outcome(
        self,
        spot: SpotRecord,
        outcome: PracticeOutcome | str,
        now: datetime | None = None,
        deadline: ProjectDeadline | datetime | None = None,
        minutes_spent: int | None = None,
    ) -> SpotRecord:
        """Apply a practice outcome and return the updated spot."""
        return self.engine.update(
            spot,
            PracticeOutcome(outcome),
            now or self.clock.now(),
            deadline=deadline,
            minutes_spent=minutes_spent,
        )

    def due_spots(
        self,
        all_spots: Iterable[SpotRecord],
        now: datetime | None = None,
    ) -> list[SpotRecord]:
        """Active spots with no due date or ``next_due <= now``, in input order."""
        now = now or self.clock.now()
        return [s for s in all_spots if s.is_active and s.is_due(now)]

    def build_session(
        self,
        candidates: Sequence[SpotRecord],
        budget: float | timedelta,
        mode: SessionMode | str = SessionMode.SMART,
        deadline: ProjectDeadline | datetime | None = None,
        max_spots: int | None = None,
    ) -> list[SpotRecord]:
        """Ordered, time-bounded practice session."""
        return self.plan_session(candidates, budget, mode, deadline, max_spots).spots

    def plan_session(
        self,
        candidates: Sequence[SpotRecord],
        budget: float | timedelta,
        mode: SessionMode | str = SessionMode.SMART,
        deadline: ProjectDeadline | datetime | None = None,
        max_spots: int | None = None,
    ) -> SessionPlan:
        """Like build_session, with packing diagnostics."""
        return self.selector.select_plan(
            candidates,
            budget,
            mode,
            deadline=deadline,
            max_spots=max_spots,
            now=self.clock.now(),
        )

    def urgency(
        self,
        spot: SpotRecord,
        deadline: ProjectDeadline | datetime | None = None,
        now: datetime | None = None,
    ) -> float:
        """Urgency score (higher = more urgent; for relative ordering only)."""
        return self.scorer.score(spot, deadline, now or self.clock.now())
