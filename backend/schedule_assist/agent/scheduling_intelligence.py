"""
Scheduling Intelligence - Alternative Meeting Time Suggestions

Grid-searches a multi-day horizon of candidate start times around a target
slot, checks the roster's availability for each candidate, and ranks the
candidates by how many participants can attend and how close they are to
the time originally asked for.
"""

import logging
from typing import Dict, List, Optional, Iterable, Iterator, Tuple
from datetime import datetime, timedelta, time, date
from dataclasses import dataclass, field

from ..utils.config import config, SuggestionConfig, MAX_HORIZON_DAYS, MAX_SUGGESTIONS
from ..utils.helpers import (
    time_to_minutes, minutes_to_time, minutes_since_midnight,
    get_day_name, measure_execution_time
)
from ..services.availability_store import AvailabilityStore, Participant
from .availability_checker import AvailabilityChecker, AvailabilityStatus, EventTimeWindow

logger = logging.getLogger(__name__)

# Ranking weights. Changing any of these changes suggestion order.
AVAILABILITY_WEIGHT = 50
DATE_PROXIMITY_WEIGHT = 30
DAY_OFFSET_PENALTY = 5
TIME_PROXIMITY_WEIGHT = 20
TIME_DECAY_MINUTES = 30

@dataclass
class TimeSuggestion:
    """One ranked alternative meeting time"""
    date: date
    time_label: str
    start: datetime
    end: datetime
    available_count: int
    statuses: List[AvailabilityStatus]
    score: float
    day_offset: int
    weekday_name: str
    score_breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def total_participants(self) -> int:
        return len(self.statuses)

    @property
    def reasoning(self) -> str:
        return (
            f"{self.available_count}/{self.total_participants} available on "
            f"{self.weekday_name} {self.date.isoformat()} at {self.time_label}"
        )

def availability_score(available_count: int, total_participants: int) -> float:
    if total_participants <= 0:
        return 0.0
    return (available_count / total_participants) * AVAILABILITY_WEIGHT

def date_proximity_score(day_offset: int) -> float:
    return float(max(0, DATE_PROXIMITY_WEIGHT - day_offset * DAY_OFFSET_PENALTY))

def time_proximity_score(minutes_from_target: int) -> float:
    return max(0.0, TIME_PROXIMITY_WEIGHT - minutes_from_target / TIME_DECAY_MINUTES)

class SchedulingIntelligence:
    """
    Alternative time suggestion engine

    Every candidate on the search grid is evaluated for the whole roster and
    keeps its per-participant breakdown, so each ranking can be explained.
    """

    def __init__(
        self,
        store: AvailabilityStore,
        settings: Optional[SuggestionConfig] = None
    ):
        self.checker = AvailabilityChecker(store)
        self.settings = settings or config.suggestions

    @property
    def horizon_days(self) -> int:
        return min(self.settings.horizon_days, MAX_HORIZON_DAYS)

    def candidate_starts(self, target_start: datetime) -> Iterator[Tuple[int, datetime]]:
        """Yield (day_offset, start) for every grid point of the search horizon"""
        grid_start = time_to_minutes(self.settings.grid_start)
        grid_end = time_to_minutes(self.settings.grid_end)
        target_day = target_start.date()

        for day_offset in range(self.horizon_days):
            day = target_day + timedelta(days=day_offset)
            for minutes in range(grid_start, grid_end + 1, self.settings.grid_step_minutes):
                hour, minute = divmod(minutes, 60)
                yield day_offset, datetime.combine(
                    day, time(hour, minute), tzinfo=target_start.tzinfo
                )

    def score_candidate(
        self,
        available_count: int,
        total_participants: int,
        day_offset: int,
        minutes_from_target: int
    ) -> Dict[str, float]:
        """Score terms for one candidate plus their total"""
        scores = {
            'availability': availability_score(available_count, total_participants),
            'date_proximity': date_proximity_score(day_offset),
            'time_proximity': time_proximity_score(minutes_from_target),
        }
        scores['total'] = scores['availability'] + scores['date_proximity'] + scores['time_proximity']
        return scores

    def rank_candidates(
        self,
        roster: Iterable[Participant],
        target_start: datetime,
        duration_minutes: Optional[int] = None
    ) -> List[TimeSuggestion]:
        """
        Every grid candidate with at least one participant fully available,
        best first
        """
        roster = list(roster)
        duration = duration_minutes if duration_minutes is not None else self.settings.default_duration_minutes

        if not roster or duration <= 0:
            logger.debug("Nothing to search: empty roster or non-positive duration")
            return []

        target_minutes = minutes_since_midnight(target_start)
        suggestions: List[TimeSuggestion] = []

        for day_offset, start in self.candidate_starts(target_start):
            end = start + timedelta(minutes=duration)
            if end.date() != start.date():
                continue

            statuses = self.checker.check_roster(roster, EventTimeWindow(start, end))
            available_count = AvailabilityChecker.count_available(statuses)
            if available_count == 0:
                continue

            candidate_minutes = minutes_since_midnight(start)
            scores = self.score_candidate(
                available_count,
                len(roster),
                day_offset,
                abs(candidate_minutes - target_minutes)
            )

            suggestions.append(TimeSuggestion(
                date=start.date(),
                time_label=minutes_to_time(candidate_minutes),
                start=start,
                end=end,
                available_count=available_count,
                statuses=statuses,
                score=scores['total'],
                day_offset=day_offset,
                weekday_name=get_day_name(start.weekday()),
                score_breakdown=scores
            ))

        if not suggestions:
            logger.warning(
                f"No candidate time in the next {self.horizon_days} days "
                f"has any of {len(roster)} participants available"
            )
            return []

        suggestions.sort(key=lambda s: (-s.score, -s.available_count, s.day_offset))
        return suggestions

    @measure_execution_time
    def suggest_best_times(
        self,
        roster: Iterable[Participant],
        target_start: datetime,
        duration_minutes: Optional[int] = None,
        max_suggestions: Optional[int] = None
    ) -> List[TimeSuggestion]:
        """
        Rank alternative meeting times for a roster

        Args:
            roster: Participants who should attend
            target_start: Originally requested start; its date opens the
                search horizon and its time of day is the proximity anchor
            duration_minutes: Meeting length, defaults to the configured value
            max_suggestions: Result limit, defaults to the configured value
                and never exceeds MAX_SUGGESTIONS

        Returns:
            At most max_suggestions suggestions, best first. Candidates where
            nobody is fully available are never returned.
        """
        roster = list(roster)
        limit = max_suggestions if max_suggestions is not None else self.settings.max_suggestions
        limit = min(limit, MAX_SUGGESTIONS)

        if limit <= 0:
            logger.debug("Nothing to search: non-positive limit")
            return []

        suggestions = self.rank_candidates(roster, target_start, duration_minutes)
        top_suggestions = suggestions[:limit]

        if suggestions:
            logger.info(
                f"Ranked {len(suggestions)} candidate times for {len(roster)} participants, "
                f"returning {len(top_suggestions)}"
            )
        for suggestion in top_suggestions:
            logger.debug(f"Suggestion {suggestion.reasoning} (score {suggestion.score:.2f})")

        return top_suggestions

def suggest_times(
    roster: Iterable[Participant],
    target_start: datetime,
    store: AvailabilityStore,
    duration_minutes: Optional[int] = None
) -> List[TimeSuggestion]:
    """Top ranked alternative times for a roster around a target start"""
    return SchedulingIntelligence(store).suggest_best_times(roster, target_start, duration_minutes)

# Export main classes
__all__ = [
    'SchedulingIntelligence',
    'TimeSuggestion',
    'suggest_times',
    'availability_score',
    'date_proximity_score',
    'time_proximity_score',
    'AVAILABILITY_WEIGHT',
    'DATE_PROXIMITY_WEIGHT',
    'DAY_OFFSET_PENALTY',
    'TIME_PROXIMITY_WEIGHT',
    'TIME_DECAY_MINUTES'
]
