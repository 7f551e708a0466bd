"""
Unit tests for performance readiness scoring and time-to-readiness estimates.
"""

import dataclasses
from datetime import timedelta

import pytest

from spot_scheduler.core.models import OutcomeRecord, PracticeOutcome, ProjectDeadline, SpotColor
from spot_scheduler.planning.concert_readiness import (
    ReadinessBand,
    assess_readiness,
    readiness_band,
    readiness_score,
    recent_practice_multiplier,
    spot_readiness,
    time_to_readiness,
)

G = PracticeOutcome.GOOD
F = PracticeOutcome.FAILED


def outcomes(now, results, days_ago=10, minutes=0):
    return tuple(
        OutcomeRecord(
            timestamp=now - timedelta(days=days_ago) + timedelta(hours=i), outcome=o, minutes_spent=minutes
        )
        for i, o in enumerate(results)
    )


@pytest.fixture
def solid_spot(make_spot, now):
    """Three clean runs on three recent days, an hour of practice in total."""

    def _make(spot_id="solid", **overrides):
        history = tuple(
            OutcomeRecord(timestamp=now - timedelta(days=d), outcome=G, minutes_spent=20)
            for d in (3, 2, 1)
        )
        fields = dict(
            practice_count=3,
            success_count=3,
            history=history,
            next_due=now + timedelta(days=2),
        )
        fields.update(overrides)
        return make_spot(spot_id, **fields)

    return _make


@pytest.fixture
def mixed_spot(make_spot, now):
    """3/4 successes, all older than a week, no recorded minutes."""
    return make_spot(
        "mixed",
        practice_count=4,
        success_count=3,
        failure_count=1,
        history=outcomes(now, [G, F, G, G]),
        next_due=now + timedelta(days=1),
    )


MIXED_SPOT_READINESS = 75 * 0.94375 * 1.1
MIXED_SET_SCORE = MIXED_SPOT_READINESS * 0.7


class TestReadinessBand:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (0, ReadinessBand.NOT_READY),
            (24.9, ReadinessBand.NOT_READY),
            (25, ReadinessBand.LEARNING),
            (50, ReadinessBand.PRACTICING),
            (75, ReadinessBand.POLISHING),
            (89.9, ReadinessBand.POLISHING),
            (90, ReadinessBand.PERFORMANCE_READY),
            (100, ReadinessBand.PERFORMANCE_READY),
        ],
    )
    def test_thresholds(self, score, expected):
        assert readiness_band(score) == expected

    def test_display_name(self):
        assert ReadinessBand.PERFORMANCE_READY.display_name == "Performance Ready"


class TestSpotReadiness:
    def test_never_practised_is_zero(self, make_spot, now):
        assert spot_readiness(make_spot(), now) == 0.0

    def test_trend_consistency_and_difficulty(self, mixed_spot, now):
        assert spot_readiness(mixed_spot, now) == pytest.approx(MIXED_SPOT_READINESS)

    def test_recent_outcomes_weigh_in(self, make_spot, now):
        # 5/10 overall, but the last five are all failures
        spot = make_spot(
            practice_count=10,
            success_count=5,
            failure_count=5,
            history=outcomes(now, [G] * 5 + [F] * 5),
            next_due=now + timedelta(days=1),
        )
        consistency = max(0.8, 1.0 - 0.25 * 0.3)
        assert spot_readiness(spot, now) == pytest.approx(50 * 0.6 * consistency * 1.0)

    @pytest.mark.parametrize(
        "overdue,expected",
        [
            (timedelta(days=-1), 120.0),
            (timedelta(hours=10), 108.0),
            (timedelta(hours=100), 60.0),
        ],
    )
    def test_overdue_penalty(self, make_spot, now, overdue, expected):
        spot = make_spot(practice_count=2, success_count=2, next_due=now - overdue)
        assert spot_readiness(spot, now) == pytest.approx(expected)


class TestRecentPracticeMultiplier:
    def test_no_practice_this_week(self, mixed_spot, now):
        assert recent_practice_multiplier([mixed_spot], now) == pytest.approx(0.7)

    def test_practice_every_day(self, make_spot, now):
        history = tuple(
            OutcomeRecord(timestamp=now - timedelta(days=d, hours=1), outcome=G) for d in range(7)
        )
        assert recent_practice_multiplier([make_spot(history=history)], now) == pytest.approx(1.3)

    def test_same_day_counts_once(self, make_spot, now):
        history = tuple(
            OutcomeRecord(timestamp=now - timedelta(hours=h), outcome=G) for h in (1, 2, 3)
        )
        assert recent_practice_multiplier([make_spot(history=history)], now) == pytest.approx(
            0.7 + 0.6 / 7
        )


class TestReadinessScore:
    def test_empty_set_scores_zero(self, now):
        assert readiness_score([], now) == 0.0

    def test_inactive_spots_are_ignored(self, solid_spot, now):
        assert readiness_score([solid_spot(is_active=False)], now) == 0.0

    def test_score_is_capped_at_100(self, solid_spot, now):
        assert readiness_score([solid_spot()], now) == 100.0

    def test_red_spots_weigh_more(self, make_spot, now):
        red = make_spot("red", color=SpotColor.RED)
        blue = make_spot(
            "blue",
            color=SpotColor.BLUE,
            practice_count=2,
            success_count=2,
            next_due=now + timedelta(days=1),
        )
        assert readiness_score([red, blue], now) == pytest.approx(120 * 0.2 / 1.2 * 0.7)

    def test_practice_time_bonus(self, mixed_spot, now):
        spent = dataclasses.replace(mixed_spot, history=outcomes(now, [G, F, G, G], minutes=60))
        # 4 hours -> 60% of the 30% bonus
        assert readiness_score([spent], now) == pytest.approx(MIXED_SET_SCORE * 1.18)

    @pytest.mark.parametrize(
        "days,factor",
        [(-1, 0.5), (5, 0.7), (20, 0.85), (60, 1.0)],
    )
    def test_deadline_pressure(self, mixed_spot, now, days, factor):
        deadline = ProjectDeadline(target_date=now + timedelta(days=days))
        assert readiness_score([mixed_spot], now, deadline) == pytest.approx(MIXED_SET_SCORE * factor)

    def test_bare_datetime_deadline(self, mixed_spot, now):
        assert readiness_score([mixed_spot], now, now + timedelta(days=5)) == pytest.approx(
            MIXED_SET_SCORE * 0.7
        )


class TestTimeToReadiness:
    def test_ready_set_needs_nothing(self, solid_spot, now):
        assert time_to_readiness([solid_spot()], now) == timedelta(0)

    def test_untouched_spot(self, make_spot, now):
        # Difficulty 3: 2 minutes per point from zero
        assert time_to_readiness([make_spot()], now) == timedelta(minutes=170)

    def test_slower_gains_above_fifty(self, mixed_spot, now):
        # Difficulty 2: 1.5 minutes per point, x1.5 above 50
        expected = round((85 - MIXED_SET_SCORE) * 1.5 * 1.5)
        assert time_to_readiness([mixed_spot], now) == timedelta(minutes=expected)

    def test_custom_target(self, make_spot, now):
        assert time_to_readiness([make_spot()], now, target_score=50) == timedelta(minutes=100)

    def test_empty_set_uses_baseline_difficulty(self, now):
        assert time_to_readiness([], now) == timedelta(minutes=170)


class TestAssessReadiness:
    def test_fits_before_deadline(self, make_spot, now):
        deadline = ProjectDeadline(target_date=now + timedelta(days=10), daily_available_minutes=30)

        report = assess_readiness([make_spot()], now, deadline)

        assert report.score == 0.0
        assert report.band == ReadinessBand.NOT_READY
        assert report.time_needed == timedelta(minutes=170)
        assert report.days_available == 10
        assert report.feasible

    def test_daily_minutes_override(self, make_spot, now):
        deadline = ProjectDeadline(target_date=now + timedelta(days=10), daily_available_minutes=30)

        report = assess_readiness([make_spot()], now, deadline, daily_minutes=10)

        assert not report.feasible

    def test_passed_deadline_is_infeasible(self, make_spot, now):
        deadline = ProjectDeadline(target_date=now - timedelta(days=2), daily_available_minutes=60)
        assert not assess_readiness([make_spot()], now, deadline).feasible

    def test_no_deadline_assumes_a_year(self, solid_spot, now):
        report = assess_readiness([solid_spot()], now)

        assert report.days_available == 365
        assert report.band == ReadinessBand.PERFORMANCE_READY
        assert report.feasible
