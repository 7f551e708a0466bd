"""
Practice-spot spaced-repetition scheduler.

Decides when each practice spot (a region of a musical score) is next due,
how urgent it is, and which spots fit a time-boxed practice session.

Entry points:
- SpotScheduler: record_outcome / due_spots / build_session / urgency
- PracticeService: repository-backed orchestration
- planning: practice plans and statistics
"""

from spot_scheduler.config import SchedulerSettings, get_settings
from spot_scheduler.core import (
    Clock,
    FixedClock,
    OutcomeRecord,
    PracticeOutcome,
    ProjectDeadline,
    ProjectUrgency,
    ReadinessLevel,
    SchedulerError,
    SpotColor,
    SpotNotFoundError,
    SpotPriority,
    SpotRecord,
    SRSProfile,
    SystemClock,
)
from spot_scheduler.repository import InMemorySpotRepository, SpotRepository
from spot_scheduler.scheduler import SpotScheduler
from spot_scheduler.selection import SessionMode, SessionPlan
from spot_scheduler.service import PracticeService

__version__ = "1.0.0"

__all__ = [
    "SpotScheduler",
    "PracticeService",
    "SchedulerSettings",
    "get_settings",
    "SpotRecord",
    "OutcomeRecord",
    "ProjectDeadline",
    "ProjectUrgency",
    "SpotColor",
    "SpotPriority",
    "ReadinessLevel",
    "PracticeOutcome",
    "SRSProfile",
    "SessionMode",
    "SessionPlan",
    "Clock",
    "SystemClock",
    "FixedClock",
    "SpotRepository",
    "InMemorySpotRepository",
    "SchedulerError",
    "SpotNotFoundError",
]
