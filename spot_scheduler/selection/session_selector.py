"""
Session Selector.

Builds an ordered, time-boxed practice session from a candidate pool.

Modes:
- critical:    red spots only, ranked by urgency
- balanced:    per-color quotas (red/yellow/green/blue), unused slots go to
               the remaining spots by urgency
- maintenance: green spots only, ranked by urgency
- smart:       every spot, ranked by a blend of urgency, learning
               efficiency, retention risk, difficulty and confidence

Packing is first-fit: a spot that would overflow the budget is skipped and
smaller spots further down the ranking can still be taken.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from loguru import logger

from spot_scheduler.config import SchedulerSettings, get_settings
from spot_scheduler.core.models import ProjectDeadline, SpotColor, SpotRecord
from spot_scheduler.selection.spot_analysis import analyze_spots
from spot_scheduler.selection.urgency import UrgencyScorer, rank_by


class SessionMode(str, Enum):
    """Selection strategy for a practice session."""

    CRITICAL = "critical"
    BALANCED = "balanced"
    MAINTENANCE = "maintenance"
    SMART = "smart"


@dataclass
class SessionPlan:
    """A packed practice session plus packing diagnostics."""

    mode: SessionMode
    budget_minutes: float
    spots: list[SpotRecord] = field(default_factory=list)
    total_minutes: int = 0
    skipped_ids: list[str] = field(default_factory=list)

    @property
    def spot_ids(self) -> list[str]:
        return [s.id for s in self.spots]

    @property
    def remaining_minutes(self) -> float:
        return max(0.0, self.budget_minutes - self.total_minutes)

    @property
    def over_budget(self) -> bool:
        """True only for the single-oversized-spot fallback."""
        return self.total_minutes > self.budget_minutes


def budget_minutes(budget: float | timedelta) -> float:
    if isinstance(budget, timedelta):
        return max(0.0, budget.total_seconds() / 60.0)
    return max(0.0, float(budget))


class SessionSelector:
    """
    Ranks candidates by mode and packs them into a time budget.

    Key principles:
    1. Ranking is deterministic (ties go to the lower spot id)
    2. Oversized spots are skipped, not a reason to stop
    3. An empty pool yields an empty session, never an error
    """

    def __init__(
        self,
        settings: SchedulerSettings | None = None,
        scorer: UrgencyScorer | None = None,
    ):
        self.settings = settings or get_settings()
        self.scorer = scorer or UrgencyScorer()
        self._rankers: dict[SessionMode, Callable[..., list[SpotRecord]]] = {
            SessionMode.CRITICAL: self._rank_critical,
            SessionMode.BALANCED: self._rank_balanced,
            SessionMode.MAINTENANCE: self._rank_maintenance,
            SessionMode.SMART: self._rank_smart,
        }

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def select(
        self,
        candidates: Sequence[SpotRecord],
        budget: float | timedelta,
        mode: SessionMode | str,
        deadline: ProjectDeadline | datetime | None = None,
        max_spots: int | None = None,
        now: datetime | None = None,
    ) -> list[SpotRecord]:
        """Ordered spots for one session (see select_plan)."""
        return self.select_plan(candidates, budget, mode, deadline, max_spots, now).spots

    def select_plan(
        self,
        candidates: Sequence[SpotRecord],
        budget: float | timedelta,
        mode: SessionMode | str,
        deadline: ProjectDeadline | datetime | None = None,
        max_spots: int | None = None,
        now: datetime | None = None,
    ) -> SessionPlan:
        """
        Build a session plan.

        Args:
            candidates: Point-in-time snapshot of candidate spots
            budget: Time budget in minutes, or a timedelta
            mode: Selection mode
            deadline: Optional project deadline
            max_spots: Maximum spots (defaults to settings.default_max_spots)
            now: Current time (defaults to the local wall clock)

        Returns:
            SessionPlan with spots in practice order
        """
        mode = SessionMode(mode)
        now = now or datetime.now()
        limit = self.settings.default_max_spots if max_spots is None else max_spots
        plan = SessionPlan(mode=mode, budget_minutes=budget_minutes(budget))

        if not candidates or limit <= 0:
            logger.debug(f"Empty {mode.value} session: {len(candidates)} candidates, max_spots={limit}")
            return plan

        ranked = self.rank(candidates, mode, deadline, now, limit)
        self._pack(plan, ranked, limit)

        logger.info(
            f"Session built ({mode.value}): {len(plan.spots)} of {len(candidates)} spots, "
            f"{plan.total_minutes}/{plan.budget_minutes:g} min, {len(plan.skipped_ids)} skipped"
        )
        return plan

    def rank(
        self,
        candidates: Sequence[SpotRecord],
        mode: SessionMode | str,
        deadline: ProjectDeadline | datetime | None,
        now: datetime,
        max_spots: int | None = None,
    ) -> list[SpotRecord]:
        """Filter and order candidates for a mode, before budget packing."""
        limit = len(candidates) if max_spots is None else max_spots
        return self._rankers[SessionMode(mode)](list(candidates), deadline, now, limit)

    # -------------------------------------------------------------------------
    # Mode rankers
    # -------------------------------------------------------------------------

    def _rank_critical(self, pool, deadline, now, limit) -> list[SpotRecord]:
        reds = [s for s in pool if s.color == SpotColor.RED]
        return self.scorer.rank(reds, deadline, now)

    def _rank_maintenance(self, pool, deadline, now, limit) -> list[SpotRecord]:
        greens = [s for s in pool if s.color == SpotColor.GREEN]
        return self.scorer.rank(greens, deadline, now)

    def _rank_balanced(self, pool, deadline, now, limit) -> list[SpotRecord]:
        """
        Reserve a share of the session for each color.

        Each non-empty color bucket gets round(limit * share) slots (at least
        one when its share is non-zero). Slots a bucket cannot fill fall
        through to the remaining spots in urgency order.
        """
        ranked = self.scorer.rank(pool, deadline, now)
        quota = self.settings.balanced_quota

        picked: list[SpotRecord] = []
        for color in SpotColor:
            bucket = [s for s in ranked if s.color == color]
            share = quota.share(color)
            if not bucket or share <= 0:
                continue
            slots = max(1, round(limit * share))
            picked.extend(bucket[:slots])

        picked_ids = {s.id for s in picked}
        rest = [s for s in ranked if s.id not in picked_ids]
        return self.scorer.rank(picked, deadline, now) + rest

    def _rank_smart(self, pool, deadline, now, limit) -> list[SpotRecord]:
        scores = {s.id: self.scorer.score(s, deadline, now) for s in pool}
        analyses = analyze_spots(pool, scores, now)
        priority = {a.spot.id: a.overall_priority for a in analyses}
        return rank_by(pool, lambda s: priority[s.id])

    # -------------------------------------------------------------------------
    # Packing
    # -------------------------------------------------------------------------

    def _pack(self, plan: SessionPlan, ranked: list[SpotRecord], limit: int) -> None:
        for spot in ranked:
            if len(plan.spots) >= limit:
                break
            minutes = spot.recommended_time
            if plan.total_minutes + minutes <= plan.budget_minutes:
                plan.spots.append(spot)
                plan.total_minutes += minutes
            else:
                plan.skipped_ids.append(spot.id)

        if not plan.spots and ranked and plan.budget_minutes > 0:
            # Nothing fits: serve the top spot alone rather than an empty session
            top = ranked[0]
            plan.spots.append(top)
            plan.total_minutes = top.recommended_time
            plan.skipped_ids.remove(top.id)
            logger.info(
                f"No spot fits {plan.budget_minutes:g} min; using {top.id} "
                f"({top.recommended_time} min) alone"
            )
