"""
Planning Module.

Project-level helpers built on the scheduler:
- suggest_practice_plan: daily time split and feasibility before a deadline
- practice_stats / urgent_spots / recommended_daily_minutes
- readiness_score / time_to_readiness / assess_readiness: performance readiness
"""

from spot_scheduler.planning.concert_readiness import (
    ReadinessBand,
    ReadinessReport,
    assess_readiness,
    readiness_band,
    readiness_score,
    spot_readiness,
    time_to_readiness,
)
from spot_scheduler.planning.practice_plan import PracticePlan, suggest_practice_plan
from spot_scheduler.planning.practice_stats import (
    PracticeStats,
    needs_attention,
    practice_stats,
    recommended_daily_minutes,
    urgent_spots,
)

__all__ = [
    "PracticePlan",
    "suggest_practice_plan",
    "PracticeStats",
    "practice_stats",
    "needs_attention",
    "urgent_spots",
    "recommended_daily_minutes",
    "ReadinessBand",
    "ReadinessReport",
    "readiness_band",
    "readiness_score",
    "spot_readiness",
    "time_to_readiness",
    "assess_readiness",
]
