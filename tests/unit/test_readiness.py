"""
Unit tests for the readiness / color state machine.
"""

from datetime import timedelta

import pytest

from spot_scheduler.core.models import (
    OutcomeRecord,
    PracticeOutcome,
    ReadinessLevel,
    SpotColor,
    SpotPriority,
)
from spot_scheduler.scheduling.readiness import suggest_color, transition

GOOD = PracticeOutcome.GOOD


def step(level, outcome=GOOD, repetitions=0, success_rate=0.0, priority=SpotPriority.MEDIUM):
    return transition(
        level=level,
        priority=priority,
        outcome=outcome,
        repetitions=repetitions,
        success_rate=success_rate,
    )


class TestFailure:
    @pytest.mark.parametrize("level", list(ReadinessLevel))
    def test_failure_always_demotes_to_red_learning(self, level):
        state = step(level, PracticeOutcome.FAILED, repetitions=12, success_rate=1.0)
        assert state.level == ReadinessLevel.LEARNING
        assert state.color == SpotColor.RED


class TestStruggled:
    @pytest.mark.parametrize("level", [ReadinessLevel.REVIEW, ReadinessLevel.MASTERED])
    def test_struggled_demotes_to_learning(self, level):
        state = step(level, PracticeOutcome.STRUGGLED)
        assert state.level == ReadinessLevel.LEARNING
        assert state.color == SpotColor.YELLOW

    def test_struggled_keeps_new_spots_new(self):
        state = step(ReadinessLevel.NEW, PracticeOutcome.STRUGGLED)
        assert state.level == ReadinessLevel.NEW
        assert state.color == SpotColor.YELLOW


class TestPromotion:
    def test_new_to_learning(self):
        assert step(ReadinessLevel.NEW, repetitions=1).level == ReadinessLevel.NEW
        assert step(ReadinessLevel.NEW, repetitions=2).level == ReadinessLevel.LEARNING

    def test_learning_to_review_by_repetitions(self):
        assert step(ReadinessLevel.LEARNING, repetitions=5).level == ReadinessLevel.REVIEW

    def test_learning_to_review_by_success_rate(self):
        promoted = step(ReadinessLevel.LEARNING, repetitions=3, success_rate=0.7)
        held = step(ReadinessLevel.LEARNING, repetitions=3, success_rate=0.6)
        assert promoted.level == ReadinessLevel.REVIEW
        assert held.level == ReadinessLevel.LEARNING

    def test_review_to_mastered(self):
        assert step(ReadinessLevel.REVIEW, repetitions=10).level == ReadinessLevel.MASTERED
        assert (
            step(ReadinessLevel.REVIEW, repetitions=5, success_rate=0.9).level
            == ReadinessLevel.MASTERED
        )
        assert (
            step(ReadinessLevel.REVIEW, repetitions=5, success_rate=0.85).level
            == ReadinessLevel.REVIEW
        )

    def test_one_step_per_call(self):
        state = step(ReadinessLevel.NEW, PracticeOutcome.EXCELLENT, repetitions=12, success_rate=1.0)
        assert state.level == ReadinessLevel.LEARNING

    def test_mastered_stays_mastered(self):
        assert step(ReadinessLevel.MASTERED, repetitions=1).level == ReadinessLevel.MASTERED


class TestSuccessColor:
    def test_mastered_low_priority_turns_green(self):
        state = step(ReadinessLevel.REVIEW, repetitions=10, priority=SpotPriority.LOW)
        assert state.level == ReadinessLevel.MASTERED
        assert state.color == SpotColor.GREEN

    @pytest.mark.parametrize("priority", [SpotPriority.MEDIUM, SpotPriority.HIGH])
    def test_mastered_other_priority_stays_yellow(self, priority):
        state = step(ReadinessLevel.REVIEW, repetitions=10, priority=priority)
        assert state.color == SpotColor.YELLOW

    def test_not_mastered_is_yellow(self):
        state = step(ReadinessLevel.NEW, repetitions=1, priority=SpotPriority.LOW)
        assert state.color == SpotColor.YELLOW


def with_history(make_spot, now, outcomes, color):
    history = tuple(
        OutcomeRecord(timestamp=now + timedelta(days=i), outcome=o, minutes_spent=5)
        for i, o in enumerate(outcomes)
    )
    return make_spot(color=color, history=history)


class TestSuggestColor:
    def test_too_little_history_keeps_color(self, make_spot, now):
        spot = with_history(make_spot, now, [GOOD, GOOD], SpotColor.RED)
        assert suggest_color(spot) == SpotColor.RED

    def test_consistent_success_promotes(self, make_spot, now):
        red = with_history(make_spot, now, [GOOD] * 5, SpotColor.RED)
        yellow = with_history(make_spot, now, [GOOD] * 5, SpotColor.YELLOW)
        assert suggest_color(red) == SpotColor.YELLOW
        assert suggest_color(yellow) == SpotColor.GREEN

    def test_two_failures_demote(self, make_spot, now):
        outcomes = [GOOD, PracticeOutcome.FAILED, GOOD, PracticeOutcome.FAILED, GOOD]
        spot = with_history(make_spot, now, outcomes, SpotColor.GREEN)
        assert suggest_color(spot) == SpotColor.YELLOW

    def test_only_recent_window_counts(self, make_spot, now):
        outcomes = [PracticeOutcome.FAILED] * 4 + [GOOD] * 5
        spot = with_history(make_spot, now, outcomes, SpotColor.YELLOW)
        assert suggest_color(spot) == SpotColor.GREEN

    def test_mixed_results_keep_color(self, make_spot, now):
        outcomes = [GOOD, PracticeOutcome.STRUGGLED, GOOD, GOOD, PracticeOutcome.STRUGGLED]
        spot = with_history(make_spot, now, outcomes, SpotColor.YELLOW)
        assert suggest_color(spot) == SpotColor.YELLOW
