"""
Selection Module.

Read-only queries over a snapshot of spots:
- UrgencyScorer: canonical additive urgency score
- SessionSelector: mode-based ranking and first-fit time-budget packing
- spot_analysis: learner profile and smart-mode signals
"""

from spot_scheduler.selection.session_selector import (
    SessionMode,
    SessionPlan,
    SessionSelector,
    budget_minutes,
)
from spot_scheduler.selection.spot_analysis import PracticeProfile, SpotAnalysis, analyze_spots
from spot_scheduler.selection.urgency import UrgencyScorer, rank_by

__all__ = [
    "UrgencyScorer",
    "rank_by",
    "SessionMode",
    "SessionPlan",
    "SessionSelector",
    "budget_minutes",
    "PracticeProfile",
    "SpotAnalysis",
    "analyze_spots",
]
