"""
Practice Service.

Thin orchestration layer between a SpotRepository and the stateless
SpotScheduler: load, compute, persist. This is the only place that talks to
storage.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from loguru import logger

from spot_scheduler.core.exceptions import SpotNotFoundError
from spot_scheduler.core.models import PracticeOutcome, ProjectDeadline, SpotRecord
from spot_scheduler.repository import SpotRepository
from spot_scheduler.scheduler import SpotScheduler
from spot_scheduler.selection.session_selector import SessionMode


class PracticeService:
    """Records practice results and prepares today's sessions."""

    def __init__(self, repository: SpotRepository, scheduler: SpotScheduler | None = None):
        """
        Initialize the service.

        Args:
            repository: Spot persistence
            scheduler: SpotScheduler (creates default if None)
        """
        self.repository = repository
        self.scheduler = scheduler or SpotScheduler()

    def _find(self, spot_id: str) -> SpotRecord:
        for spot in self.repository.load_active_spots():
            if spot.id == spot_id:
                return spot
        raise SpotNotFoundError(spot_id)

    def record_practice(
        self,
        spot_id: str,
        outcome: PracticeOutcome | str,
        minutes_spent: int | None = None,
        deadline: ProjectDeadline | datetime | None = None,
    ) -> SpotRecord:
        """
        Record one practice attempt and persist the updated spot.

        Raises:
            SpotNotFoundError: If no active spot has this id
        """
        spot = self._find(spot_id)
        updated = self.scheduler.record_outcome(
            spot, outcome, deadline=deadline, minutes_spent=minutes_spent
        )

        self.repository.save(updated)
        self.repository.append_history(spot_id, updated.history[-1])

        logger.info(
            f"Recorded {updated.last_outcome.value} for {spot_id}: "
            f"next due {updated.next_due:%Y-%m-%d %H:%M}, {updated.color.value}/"
            f"{updated.readiness_level.value}"
        )
        return updated

    def due_today(self) -> list[SpotRecord]:
        return self.scheduler.due_spots(self.repository.load_active_spots())

    def todays_session(
        self,
        budget: float | timedelta | None = None,
        mode: SessionMode | str = SessionMode.SMART,
        deadline: ProjectDeadline | datetime | None = None,
        max_spots: int | None = None,
    ) -> list[SpotRecord]:
        """
        Build a session from the spots due now.

        Args:
            budget: Minutes or timedelta; defaults to the deadline's daily
                available time, then settings.default_session_minutes
            mode: Selection mode
            deadline: Optional project deadline
            max_spots: Maximum number of spots
        """
        if budget is None and isinstance(deadline, ProjectDeadline):
            budget = deadline.daily_available_minutes
        if budget is None:
            budget = self.scheduler.settings.default_session_minutes

        return self.scheduler.build_session(
            self.due_today(), budget, mode, deadline=deadline, max_spots=max_spots
        )
