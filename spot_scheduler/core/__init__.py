"""
Core Module - Shared domain models and interfaces.

Components:
- models: SpotRecord, OutcomeRecord, ProjectDeadline and the classification enums
- clock: injectable time sources (SystemClock, FixedClock)
- exceptions: errors raised at the repository boundary

All other modules (scheduling, selection, planning) import from here rather
than redefining shared concepts.
"""

from spot_scheduler.core.clock import Clock, FixedClock, SystemClock
from spot_scheduler.core.exceptions import SchedulerError, SpotNotFoundError
from spot_scheduler.core.models import (
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    OutcomeRecord,
    PracticeOutcome,
    ProjectDeadline,
    ProjectUrgency,
    ReadinessLevel,
    SpotColor,
    SpotPriority,
    SpotRecord,
    SRSProfile,
    as_deadline,
    days_between,
    normalize_spot,
)

__all__ = [
    # Models
    "SpotRecord",
    "OutcomeRecord",
    "ProjectDeadline",
    "SpotColor",
    "SpotPriority",
    "ReadinessLevel",
    "PracticeOutcome",
    "SRSProfile",
    "ProjectUrgency",
    "MIN_EASE_FACTOR",
    "MAX_EASE_FACTOR",
    "as_deadline",
    "days_between",
    "normalize_spot",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    # Errors
    "SchedulerError",
    "SpotNotFoundError",
]
