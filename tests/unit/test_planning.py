"""
Unit tests for practice plans and practice statistics.
"""

from datetime import timedelta

from spot_scheduler.core.models import (
    OutcomeRecord,
    PracticeOutcome,
    ProjectDeadline,
    ReadinessLevel,
    SpotColor,
)
from spot_scheduler.planning.practice_plan import (
    MSG_DEADLINE_CLOSE,
    MSG_INFEASIBLE,
    MSG_MANY_RED,
    MSG_PROMOTE_YELLOW,
    NO_DEADLINE_DAYS,
    suggest_practice_plan,
)
from spot_scheduler.planning.practice_stats import (
    needs_attention,
    practice_stats,
    recommended_daily_minutes,
    urgent_spots,
)


class TestSuggestPracticePlan:
    def test_no_spots(self, now):
        plan = suggest_practice_plan([], now, daily_minutes=30)
        assert plan.feasible
        assert plan.days_available == NO_DEADLINE_DAYS
        assert plan.recommendations == []

    def test_concert_mode_split(self, make_spot, now):
        deadline = ProjectDeadline(target_date=now + timedelta(days=5), daily_available_minutes=60)
        plan = suggest_practice_plan([make_spot()], now, deadline)

        assert (plan.red_minutes, plan.yellow_minutes, plan.green_minutes) == (42, 15, 3)
        assert plan.days_available == 5
        assert MSG_DEADLINE_CLOSE in plan.recommendations

    def test_preparation_split(self, make_spot, now):
        plan = suggest_practice_plan(
            [make_spot(color=SpotColor.GREEN)], now, now + timedelta(days=20), daily_minutes=60
        )
        assert (plan.red_minutes, plan.yellow_minutes, plan.green_minutes) == (30, 21, 9)

    def test_learning_split_without_deadline(self, make_spot, now):
        plan = suggest_practice_plan([make_spot()], now, daily_minutes=50)
        assert (plan.red_minutes, plan.yellow_minutes, plan.green_minutes) == (20, 20, 10)
        assert MSG_DEADLINE_CLOSE not in plan.recommendations

    def test_passed_deadline_counts_as_none(self, make_spot, now):
        plan = suggest_practice_plan([make_spot()], now, now - timedelta(days=3), daily_minutes=30)
        assert plan.days_available == NO_DEADLINE_DAYS

    def test_infeasible_workload(self, make_spot, now):
        spots = [make_spot(f"r{i}") for i in range(20)]
        plan = suggest_practice_plan(spots, now, now + timedelta(days=5), daily_minutes=10)

        assert not plan.feasible
        assert plan.total_estimated_minutes == 20 * 13
        assert MSG_MANY_RED in plan.recommendations
        assert MSG_INFEASIBLE in plan.recommendations

    def test_many_yellow_spots(self, make_spot, now):
        spots = [make_spot("r")] + [make_spot(f"y{i}", color=SpotColor.YELLOW) for i in range(3)]
        plan = suggest_practice_plan(spots, now, daily_minutes=30)
        assert MSG_PROMOTE_YELLOW in plan.recommendations
        assert plan.feasible


class TestPracticeStats:
    def test_counts(self, make_spot, now):
        recent = OutcomeRecord(timestamp=now - timedelta(days=2), outcome=PracticeOutcome.GOOD, minutes_spent=6)
        old = OutcomeRecord(timestamp=now - timedelta(days=9), outcome=PracticeOutcome.GOOD, minutes_spent=4)
        spots = [
            make_spot("a", readiness_level=ReadinessLevel.MASTERED, next_due=now + timedelta(days=3),
                      history=(old, recent)),
            make_spot("b", readiness_level=ReadinessLevel.LEARNING, history=(recent,)),
            make_spot("c"),
        ]

        stats = practice_stats(spots, now)

        assert stats.total_spots == 3
        assert stats.due_spots == 2
        assert stats.mastered_spots == 1
        assert stats.learning_spots == 1
        assert stats.weekly_practice_minutes == 12
        assert stats.weekly_session_count == 2


class TestNeedsAttention:
    def test_overdue_more_than_two_days(self, make_spot, now):
        assert needs_attention(make_spot(next_due=now - timedelta(days=3)), now)
        assert not needs_attention(make_spot(next_due=now - timedelta(days=1)), now)

    def test_struggling_spot(self, make_spot, now):
        spot = make_spot(next_due=now, practice_count=6, success_count=2, failure_count=4)
        assert needs_attention(spot, now)

    def test_neglected_learning_spot(self, make_spot, now):
        spot = make_spot(
            next_due=now,
            readiness_level=ReadinessLevel.LEARNING,
            last_practiced=now - timedelta(days=8),
        )
        assert needs_attention(spot, now)

    def test_urgent_spots_skips_inactive(self, make_spot, now):
        overdue = now - timedelta(days=5)
        spots = [make_spot("a", next_due=overdue), make_spot("b", next_due=overdue, is_active=False)]
        assert [s.id for s in urgent_spots(spots, now)] == ["a"]


class TestRecommendedDailyMinutes:
    def test_sum_with_buffer(self, make_spot, now):
        spots = [
            make_spot("a"),
            make_spot("b"),
            make_spot("later", next_due=now + timedelta(days=1)),
        ]
        assert recommended_daily_minutes(spots, now) == round(26 * 1.2)

    def test_limited_to_fifteen_spots(self, make_spot, now):
        spots = [make_spot(f"s{i:02d}", recommended_minutes=4) for i in range(20)]
        assert recommended_daily_minutes(spots, now) == round(15 * 4 * 1.2)
