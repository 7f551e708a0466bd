"""
Scheduling Module.

Provides the per-attempt update path:
- SRSEngine: SM-2 derived ease/interval/repetition update with retry and sleep gate
- DeadlinePressureModel: interval compression near a project deadline
- readiness: readiness level / color state machine
"""

from spot_scheduler.scheduling.deadline_pressure import DeadlinePressureModel, deadline_bonus
from spot_scheduler.scheduling.readiness import ReadinessState, suggest_color, transition
from spot_scheduler.scheduling.srs_engine import SRSEngine, SRSStep

__all__ = [
    "SRSEngine",
    "SRSStep",
    "DeadlinePressureModel",
    "deadline_bonus",
    "ReadinessState",
    "transition",
    "suggest_color",
]
