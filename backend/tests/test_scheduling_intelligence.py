"""
Unit tests for alternative meeting time suggestions.
"""

from datetime import date, timedelta

import pytest

from schedule_assist import suggest_times
from schedule_assist.agent.scheduling_intelligence import (
    SchedulingIntelligence,
    availability_score,
    date_proximity_score,
    time_proximity_score,
)
from schedule_assist.services.availability_store import AvailabilityStore, Participant
from schedule_assist.utils.config import SuggestionConfig

from .helpers import ALL_WEEK, MONDAY, at, weekly


def settings(**overrides) -> SuggestionConfig:
    values = dict(
        horizon_days=7,
        grid_start="08:00",
        grid_end="17:30",
        grid_step_minutes=30,
        max_suggestions=4,
        default_duration_minutes=60,
    )
    values.update(overrides)
    return SuggestionConfig(**values)


@pytest.fixture
def one_free_store():
    """Only p1 declares anything: 09:00-17:00 every day of the week."""
    return AvailabilityStore([weekly("p1", ALL_WEEK, ("09:00", "17:00"))])


class TestScoreTerms:
    """Tests for the individual score terms."""

    def test_availability_term(self):
        assert availability_score(4, 4) == 50
        assert availability_score(1, 4) == 12.5
        assert availability_score(0, 0) == 0

    def test_date_term_clamped(self):
        assert date_proximity_score(0) == 30
        assert date_proximity_score(2) == 20
        assert date_proximity_score(6) == 0
        assert date_proximity_score(9) == 0

    def test_time_term_clamped(self):
        assert time_proximity_score(0) == 20
        assert time_proximity_score(90) == 17
        assert time_proximity_score(600) == 0
        assert time_proximity_score(900) == 0

    def test_score_candidate_total(self, one_free_store):
        engine = SchedulingIntelligence(one_free_store, settings())
        scores = engine.score_candidate(1, 4, 1, 60)
        assert scores == {
            "availability": 12.5,
            "date_proximity": 25.0,
            "time_proximity": 18.0,
            "total": 55.5,
        }


class TestCandidateGrid:
    """Tests for the candidate search grid."""

    def test_grid_covers_horizon(self, one_free_store):
        engine = SchedulingIntelligence(one_free_store, settings())
        candidates = list(engine.candidate_starts(at(MONDAY, "10:00")))
        assert len(candidates) == 7 * 20
        assert candidates[0] == (0, at(MONDAY, "08:00"))
        assert candidates[19] == (0, at(MONDAY, "17:30"))
        assert candidates[-1] == (6, at(MONDAY + timedelta(days=6), "17:30"))

    def test_horizon_never_exceeds_a_week(self, one_free_store):
        engine = SchedulingIntelligence(one_free_store, settings(horizon_days=30))
        offsets = {offset for offset, _ in engine.candidate_starts(at(MONDAY, "10:00"))}
        assert offsets == set(range(7))


class TestSuggestBestTimes:
    """Tests for ranking alternative times."""

    def test_one_free_participant(self, roster_of_four, one_free_store):
        # Nobody can make 08:00; p1 is the only one with any availability.
        suggestions = suggest_times(roster_of_four, at(MONDAY, "08:00"), one_free_store)

        assert [s.time_label for s in suggestions] == ["09:00", "09:30", "10:00", "10:30"]
        assert all(s.available_count == 1 for s in suggestions)
        assert all(s.day_offset == 0 for s in suggestions)
        assert suggestions[0].score == pytest.approx(60.5)
        assert suggestions[0].weekday_name == "Monday"
        assert suggestions[0].date == date(2025, 1, 6)
        assert len(suggestions[0].statuses) == 4

    def test_target_ranks_first_when_everyone_is_free(self, roster_of_four):
        store = AvailabilityStore([weekly(p.id, ALL_WEEK, ("00:00", "23:59")) for p in roster_of_four])
        suggestions = suggest_times(roster_of_four, at(MONDAY, "10:00"), store)

        best = suggestions[0]
        assert best.time_label == "10:00"
        assert best.day_offset == 0
        assert best.score == 100
        assert best.score_breakdown["date_proximity"] + best.score_breakdown["time_proximity"] == 50

    def test_target_proximity_terms_are_maximal(self, roster_of_four, one_free_store):
        engine = SchedulingIntelligence(one_free_store, settings())
        suggestions = engine.rank_candidates(roster_of_four, at(MONDAY, "11:00"))

        target = next(s for s in suggestions if s.day_offset == 0 and s.time_label == "11:00")
        proximity = lambda s: s.score_breakdown["date_proximity"] + s.score_breakdown["time_proximity"]
        assert proximity(target) == 50
        assert all(proximity(s) <= proximity(target) for s in suggestions)

    def test_empty_roster(self, one_free_store):
        assert suggest_times([], at(MONDAY, "10:00"), one_free_store) == []

    def test_nobody_available(self, roster_of_four):
        assert suggest_times(roster_of_four, at(MONDAY, "10:00"), AvailabilityStore()) == []

    def test_never_more_than_limit(self, roster_of_four):
        store = AvailabilityStore([weekly(p.id, ALL_WEEK, ("08:00", "18:30")) for p in roster_of_four])
        suggestions = suggest_times(roster_of_four, at(MONDAY, "14:00"), store)
        assert len(suggestions) == 4
        assert all(s.available_count >= 1 for s in suggestions)

    def test_sorted_by_score_then_count_then_day(self, roster_of_four):
        store = AvailabilityStore([
            weekly("p1", ALL_WEEK, ("08:00", "18:30")),
            weekly("p2", [1, 2], ("09:00", "12:00")),
            weekly("p3", [3], ("13:00", "17:00")),
        ])
        engine = SchedulingIntelligence(store, settings())
        suggestions = engine.rank_candidates(roster_of_four, at(MONDAY, "12:00"))

        keys = [(-s.score, -s.available_count, s.day_offset) for s in suggestions]
        assert keys == sorted(keys)

    def test_skips_candidates_ending_next_day(self):
        roster = [Participant(id="owl", name="Night Owl")]
        store = AvailabilityStore([weekly("owl", ALL_WEEK, ("00:00", "23:59"))])
        engine = SchedulingIntelligence(
            store, settings(horizon_days=1, grid_end="23:30")
        )
        suggestions = engine.rank_candidates(roster, at(MONDAY, "08:00"), duration_minutes=60)

        labels = {s.time_label for s in suggestions}
        assert "22:30" in labels
        assert "23:00" not in labels
        assert "23:30" not in labels
        assert all(s.end.date() == s.start.date() for s in suggestions)

    def test_duration_must_fit_declared_window(self, roster_of_four, one_free_store):
        suggestions = suggest_times(roster_of_four, at(MONDAY, "16:00"), one_free_store, duration_minutes=120)
        assert suggestions
        assert all(s.end - s.start == timedelta(minutes=120) for s in suggestions)
        assert all(s.end.hour < 17 or (s.end.hour == 17 and s.end.minute == 0) for s in suggestions)

    def test_non_positive_duration_returns_nothing(self, roster_of_four, one_free_store):
        assert suggest_times(roster_of_four, at(MONDAY, "10:00"), one_free_store, duration_minutes=0) == []

    def test_reasoning(self, roster_of_four, one_free_store):
        suggestion = suggest_times(roster_of_four, at(MONDAY, "08:00"), one_free_store)[0]
        assert suggestion.reasoning == "1/4 available on Monday 2025-01-06 at 09:00"

    def test_requested_limit_is_capped(self, roster_of_four):
        store = AvailabilityStore([weekly(p.id, ALL_WEEK, ("08:00", "18:30")) for p in roster_of_four])
        engine = SchedulingIntelligence(store, settings(max_suggestions=10))
        assert len(engine.suggest_best_times(roster_of_four, at(MONDAY, "14:00"))) == 4
        assert len(engine.suggest_best_times(roster_of_four, at(MONDAY, "14:00"), max_suggestions=25)) == 4
        assert len(engine.suggest_best_times(roster_of_four, at(MONDAY, "14:00"), max_suggestions=2)) == 2

    def test_ranking_keeps_every_candidate(self, roster_of_four, one_free_store):
        engine = SchedulingIntelligence(one_free_store, settings())
        ranked = engine.rank_candidates(roster_of_four, at(MONDAY, "08:00"))
        assert ranked[:4] == engine.suggest_best_times(roster_of_four, at(MONDAY, "08:00"))
        assert len(ranked) > 4
