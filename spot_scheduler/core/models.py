"""
Core Practice-Spot Models.

Canonical data types shared by the scheduling, selection and planning
modules:
- SpotColor / SpotPriority / ReadinessLevel: classification enums
- PracticeOutcome: ordinal quality signal from one practice attempt
- SRSProfile: pacing profile (minimum scheduling interval)
- SpotRecord: one rehearsable region of a score plus its SRS state
- OutcomeRecord: append-only history entry
- ProjectDeadline: optional concert / project target date
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
DEFAULT_EASE_FACTOR = 2.5

SECONDS_PER_DAY = 86400.0


# =============================================================================
# Enumerations
# =============================================================================


class SpotColor(str, Enum):
    """User-facing urgency/readiness indicator."""

    RED = "red"  # Critical - urgent practice needed
    YELLOW = "yellow"  # Practice - needs active work
    GREEN = "green"  # Maintenance - occasional review
    BLUE = "blue"  # Solved - nearly complete

    @property
    def priority(self) -> int:
        """Priority rank (higher = more urgent), not a magnitude."""
        return {
            SpotColor.RED: 4,
            SpotColor.YELLOW: 3,
            SpotColor.GREEN: 2,
            SpotColor.BLUE: 1,
        }[self]

    @property
    def display_name(self) -> str:
        return {
            SpotColor.RED: "Critical",
            SpotColor.YELLOW: "Practice",
            SpotColor.GREEN: "Maintenance",
            SpotColor.BLUE: "Solved",
        }[self]

    @property
    def description(self) -> str:
        return {
            SpotColor.RED: "Urgent spots requiring immediate attention",
            SpotColor.YELLOW: "Spots in active practice that need work",
            SpotColor.GREEN: "Spots that are becoming stable",
            SpotColor.BLUE: "Spots that are nearly mastered",
        }[self]


class SpotPriority(str, Enum):
    """Owner-assigned priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReadinessLevel(str, Enum):
    """Learning stage derived from SRS progression."""

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    MASTERED = "mastered"

    @property
    def rank(self) -> int:
        """Ordinal position (new=0 ... mastered=3)."""
        return {
            ReadinessLevel.NEW: 0,
            ReadinessLevel.LEARNING: 1,
            ReadinessLevel.REVIEW: 2,
            ReadinessLevel.MASTERED: 3,
        }[self]

    @property
    def display_name(self) -> str:
        return self.value.title()


class PracticeOutcome(str, Enum):
    """Result of one practice attempt."""

    FAILED = "failed"
    STRUGGLED = "struggled"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def quality(self) -> float:
        """SM-2 style quality value (0-5 scale)."""
        return {
            PracticeOutcome.FAILED: 1.0,
            PracticeOutcome.STRUGGLED: 2.5,
            PracticeOutcome.GOOD: 4.0,
            PracticeOutcome.EXCELLENT: 5.0,
        }[self]

    @property
    def is_success(self) -> bool:
        return self in (PracticeOutcome.GOOD, PracticeOutcome.EXCELLENT)


class SRSProfile(str, Enum):
    """Pacing profile for the scheduler."""

    AGGRESSIVE = "aggressive"  # Fast advancement, higher risk
    STANDARD = "standard"  # Balanced approach
    GENTLE = "gentle"  # Conservative, ensures mastery

    @property
    def minimum_interval(self) -> timedelta:
        """Shortest gap allowed between two scheduled reviews."""
        hours = {
            SRSProfile.AGGRESSIVE: 4,
            SRSProfile.STANDARD: 8,
            SRSProfile.GENTLE: 12,
        }[self]
        return timedelta(hours=hours)

    @property
    def minimum_interval_days(self) -> float:
        return self.minimum_interval.total_seconds() / SECONDS_PER_DAY

    @property
    def display_name(self) -> str:
        return self.value.title()

    @property
    def description(self) -> str:
        return {
            SRSProfile.AGGRESSIVE: "Fast progression, higher challenge",
            SRSProfile.STANDARD: "Balanced learning pace",
            SRSProfile.GENTLE: "Slower, ensures mastery",
        }[self]


class ProjectUrgency(str, Enum):
    """Deadline proximity bucket for a project."""

    NONE = "none"
    LOW = "low"  # <= 30 days
    MEDIUM = "medium"  # <= 14 days
    HIGH = "high"  # <= 7 days
    CRITICAL = "critical"  # <= 3 days


# =============================================================================
# Time helpers
# =============================================================================


def _align(a: datetime, b: datetime) -> tuple[datetime, datetime]:
    """
    Make two datetimes comparable when only one of them is tz-aware.

    Naive values are local wall-clock time (what SystemClock returns), so
    they are attached to the local timezone rather than UTC.
    """
    if a.tzinfo is None and b.tzinfo is not None:
        a = a.astimezone()
    elif b.tzinfo is None and a.tzinfo is not None:
        b = b.astimezone()
    return a, b


def days_between(later: datetime, earlier: datetime) -> float:
    """Signed difference ``later - earlier`` in fractional days."""
    later, earlier = _align(later, earlier)
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def is_on_or_before(a: datetime, b: datetime) -> bool:
    a, b = _align(a, b)
    return a <= b


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_enum(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class OutcomeRecord:
    """A single practice attempt in a spot's history."""

    timestamp: datetime
    outcome: PracticeOutcome
    minutes_spent: int = 0

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "outcome": self.outcome.value,
            "minutes_spent": self.minutes_spent,
        }

    @classmethod
    def from_dict(cls, d: dict) -> OutcomeRecord:
        return cls(
            timestamp=_parse_datetime(d["timestamp"]),
            outcome=_parse_enum(PracticeOutcome, d.get("outcome"), PracticeOutcome.GOOD),
            minutes_spent=int(d.get("minutes_spent") or 0),
        )


@dataclass(frozen=True)
class SpotRecord:
    """
    One rehearsable region of a score.

    Records are immutable: the SRS engine returns a new record for every
    practice attempt, and ``history`` only ever grows at the end.
    """

    id: str
    piece_id: str
    page_number: int = 1
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0
    title: str = ""

    # SRS state
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 1  # Days
    repetitions: int = 0
    next_due: datetime | None = None  # None = due now
    last_practiced: datetime | None = None

    # Classification
    color: SpotColor = SpotColor.RED
    priority: SpotPriority = SpotPriority.MEDIUM
    readiness_level: ReadinessLevel = ReadinessLevel.NEW

    # Statistics
    practice_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    history: tuple[OutcomeRecord, ...] = field(default_factory=tuple)

    is_active: bool = True
    recommended_minutes: int | None = None  # Explicit override
    last_outcome: PracticeOutcome | None = None

    # -------------------------------------------------------------------------
    # Derived statistics
    # -------------------------------------------------------------------------

    @property
    def success_rate(self) -> float:
        """Success rate 0.0-1.0 (0.0 when never practised)."""
        if self.practice_count <= 0:
            return 0.0
        return min(1.0, self.success_count / self.practice_count)

    @property
    def difficulty(self) -> int:
        """Difficulty 1 (very easy) to 5 (very hard) from the failure rate."""
        if self.practice_count <= 0:
            return 3
        failure_rate = self.failure_count / self.practice_count
        if failure_rate > 0.7:
            return 5
        if failure_rate > 0.5:
            return 4
        if failure_rate > 0.3:
            return 3
        if failure_rate > 0.1:
            return 2
        return 1

    @property
    def recommended_time(self) -> int:
        """Minutes this spot should get in a session (3-15)."""
        if self.recommended_minutes is not None:
            return max(0, self.recommended_minutes)

        base = 3 + self.difficulty
        base += {
            SpotColor.RED: 4,
            SpotColor.YELLOW: 2,
            SpotColor.GREEN: 1,
            SpotColor.BLUE: -1,
        }[self.color]
        base += {
            ReadinessLevel.NEW: 3,
            ReadinessLevel.LEARNING: 2,
            ReadinessLevel.REVIEW: 0,
            ReadinessLevel.MASTERED: -2,
        }[self.readiness_level]

        if self.practice_count > 0:
            if self.success_rate < 0.4:
                base += 3
            elif self.success_rate > 0.8:
                base -= 1

        return int(_clamp(base, 3, 15))

    def is_due(self, now: datetime) -> bool:
        """Due when never scheduled or ``next_due <= now``."""
        if self.next_due is None:
            return True
        return is_on_or_before(self.next_due, now)

    def days_overdue(self, now: datetime) -> float:
        """Fractional days past ``next_due`` (0.0 when not overdue)."""
        if self.next_due is None:
            return 0.0
        return max(0.0, days_between(now, self.next_due))

    def days_since_practice(self, now: datetime) -> float | None:
        if self.last_practiced is None:
            return None
        return max(0.0, days_between(now, self.last_practiced))

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        d = asdict(self)
        d["color"] = self.color.value
        d["priority"] = self.priority.value
        d["readiness_level"] = self.readiness_level.value
        d["last_outcome"] = self.last_outcome.value if self.last_outcome else None
        d["next_due"] = self.next_due.isoformat() if self.next_due else None
        d["last_practiced"] = self.last_practiced.isoformat() if self.last_practiced else None
        d["history"] = [h.to_dict() for h in self.history]
        return d

    @classmethod
    def from_dict(cls, d: dict) -> SpotRecord:
        """Build a record from persisted data, tolerating missing/unknown values."""
        last_outcome = d.get("last_outcome")
        spot = cls(
            id=str(d["id"]),
            piece_id=str(d.get("piece_id", "")),
            page_number=int(d.get("page_number") or 1),
            x=float(d.get("x") or 0.0),
            y=float(d.get("y") or 0.0),
            width=float(d.get("width") if d.get("width") is not None else 1.0),
            height=float(d.get("height") if d.get("height") is not None else 1.0),
            title=d.get("title") or "",
            ease_factor=float(
                d.get("ease_factor") if d.get("ease_factor") is not None else DEFAULT_EASE_FACTOR
            ),
            interval=int(d.get("interval") if d.get("interval") is not None else 1),
            repetitions=int(d.get("repetitions") or 0),
            next_due=_parse_datetime(d.get("next_due")),
            last_practiced=_parse_datetime(d.get("last_practiced")),
            color=_parse_enum(SpotColor, d.get("color"), SpotColor.RED),
            priority=_parse_enum(SpotPriority, d.get("priority"), SpotPriority.MEDIUM),
            readiness_level=_parse_enum(
                ReadinessLevel, d.get("readiness_level"), ReadinessLevel.NEW
            ),
            practice_count=int(d.get("practice_count") or 0),
            success_count=int(d.get("success_count") or 0),
            failure_count=int(d.get("failure_count") or 0),
            history=tuple(OutcomeRecord.from_dict(h) for h in d.get("history") or []),
            is_active=bool(d.get("is_active", True)),
            recommended_minutes=(
                int(d["recommended_minutes"]) if d.get("recommended_minutes") is not None else None
            ),
            last_outcome=(
                _parse_enum(PracticeOutcome, last_outcome, None) if last_outcome else None
            ),
        )
        return normalize_spot(spot)


def normalize_spot(spot: SpotRecord) -> SpotRecord:
    """
    Clamp a record into its valid ranges.

    Records may have been written by another code path, so out-of-range
    values are repaired rather than rejected.
    """
    success = max(0, spot.success_count)
    failure = max(0, spot.failure_count)
    return replace(
        spot,
        ease_factor=_clamp(spot.ease_factor, MIN_EASE_FACTOR, MAX_EASE_FACTOR),
        interval=max(0, spot.interval),
        repetitions=max(0, spot.repetitions),
        x=_clamp(spot.x, 0.0, 1.0),
        y=_clamp(spot.y, 0.0, 1.0),
        width=_clamp(spot.width, 0.0, 1.0),
        height=_clamp(spot.height, 0.0, 1.0),
        success_count=success,
        failure_count=failure,
        practice_count=max(spot.practice_count, success + failure, 0),
        history=tuple(spot.history),
        recommended_minutes=(
            max(0, int(spot.recommended_minutes)) if spot.recommended_minutes is not None else None
        ),
    )


@dataclass(frozen=True)
class ProjectDeadline:
    """A linked project target date (e.g. a concert). Owned by the caller."""

    target_date: datetime
    daily_available_minutes: float | None = None
    name: str = ""

    def days_until(self, now: datetime) -> float:
        """Fractional days until the target (negative once it has passed)."""
        return days_between(self.target_date, now)

    def has_upcoming(self, now: datetime) -> bool:
        return 0 <= self.days_until(now) <= 30

    def urgency(self, now: datetime) -> ProjectUrgency:
        days = self.days_until(now)
        if days <= 0:
            return ProjectUrgency.NONE
        if days <= 3:
            return ProjectUrgency.CRITICAL
        if days <= 7:
            return ProjectUrgency.HIGH
        if days <= 14:
            return ProjectUrgency.MEDIUM
        if days <= 30:
            return ProjectUrgency.LOW
        return ProjectUrgency.NONE


def as_deadline(deadline: ProjectDeadline | datetime | None) -> ProjectDeadline | None:
    """Accept a bare datetime wherever a deadline is expected."""
    if deadline is None or isinstance(deadline, ProjectDeadline):
        return deadline
    return ProjectDeadline(target_date=deadline)
