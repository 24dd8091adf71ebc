"""
Availability Checker - Per-Participant and Roster Availability

Classifies each participant of a roster against a proposed event window
using their declared weekly availability, and reduces the results to
summary counts for display.
"""

import logging
from typing import Dict, List, Optional, Iterable
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum

from ..utils.helpers import minutes_since_midnight, overlaps
from ..services.availability_store import AvailabilityStore, Participant, TimeWindow

logger = logging.getLogger(__name__)

MULTI_DAY_REASON = "Multi-day events are not supported currently"
NO_DAY_AVAILABILITY_REASON = "Not available that day"
PARTIAL_REASON = "Partially available during this slot"
NOT_AVAILABLE_REASON = "Not available at this time"

class AvailabilityState(Enum):
    """Outcome of checking one participant against one event window"""
    AVAILABLE = "available"
    PARTIAL = "partial"
    BUSY = "busy"
    UNKNOWN = "unknown"

@dataclass(frozen=True)
class EventTimeWindow:
    """Absolute start and end of a candidate meeting"""
    start_date: datetime
    end_date: datetime

    @property
    def is_single_day(self) -> bool:
        return self.start_date.date() == self.end_date.date()

@dataclass
class AvailabilityStatus:
    """Availability of one participant for one event window"""
    participant: Participant
    status: AvailabilityState
    reason: Optional[str] = None
    time_windows: List[TimeWindow] = field(default_factory=list)

@dataclass
class AvailabilitySummary:
    """Status counts over a roster"""
    available: int = 0
    busy: int = 0
    partial: int = 0
    unknown: int = 0
    total: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            'available': self.available,
            'busy': self.busy,
            'partial': self.partial,
            'unknown': self.unknown,
            'total': self.total
        }

class AvailabilityChecker:
    """
    Participant availability evaluator

    Only recurring weekly availability is consulted. Specific-date slots held
    by the store are ignored, so a one-off entry for a concrete date has no
    effect on the result.
    """

    def __init__(self, store: AvailabilityStore):
        self.store = store

    def check_participant(self, participant: Participant, window: EventTimeWindow) -> AvailabilityStatus:
        """
        Classify one participant against an event window

        Args:
            participant: Person to check
            window: Proposed event start and end

        Returns:
            available if a declared window contains the whole event, partial
            if declared windows only overlap it, busy otherwise, and unknown
            for events spanning more than one calendar day
        """
        if not window.is_single_day:
            return AvailabilityStatus(
                participant=participant,
                status=AvailabilityState.UNKNOWN,
                reason=MULTI_DAY_REASON
            )

        declared = self.store.get_weekday_windows(participant.id, window.start_date.weekday())
        if not declared:
            return AvailabilityStatus(
                participant=participant,
                status=AvailabilityState.BUSY,
                reason=NO_DAY_AVAILABILITY_REASON
            )

        event_start = minutes_since_midnight(window.start_date)
        event_end = minutes_since_midnight(window.end_date)

        fully_contained = False
        overlapping: List[TimeWindow] = []
        for slot in declared:
            slot_start, slot_end = slot.start_minutes, slot.end_minutes
            if not overlaps(event_start, event_end, slot_start, slot_end):
                continue
            overlapping.append(slot)
            if slot_start <= event_start and event_end <= slot_end:
                fully_contained = True

        if fully_contained:
            return AvailabilityStatus(
                participant=participant,
                status=AvailabilityState.AVAILABLE,
                time_windows=overlapping
            )
        if overlapping:
            return AvailabilityStatus(
                participant=participant,
                status=AvailabilityState.PARTIAL,
                reason=PARTIAL_REASON,
                time_windows=overlapping
            )
        return AvailabilityStatus(
            participant=participant,
            status=AvailabilityState.BUSY,
            reason=NOT_AVAILABLE_REASON
        )

    def check_roster(self, roster: Iterable[Participant], window: EventTimeWindow) -> List[AvailabilityStatus]:
        """Check every participant, in roster order"""
        return [self.check_participant(participant, window) for participant in roster]

    @staticmethod
    def summarize(statuses: Iterable[AvailabilityStatus]) -> AvailabilitySummary:
        """Count statuses by state"""
        summary = AvailabilitySummary()
        for status in statuses:
            summary.total += 1
            state = status.status.value
            setattr(summary, state, getattr(summary, state) + 1)
        return summary

    @staticmethod
    def count_available(statuses: Iterable[AvailabilityStatus]) -> int:
        return sum(1 for s in statuses if s.status == AvailabilityState.AVAILABLE)

def evaluate_participant(
    participant: Participant,
    window: EventTimeWindow,
    store: AvailabilityStore
) -> AvailabilityStatus:
    """Availability of one participant for an event window"""
    return AvailabilityChecker(store).check_participant(participant, window)

def evaluate_roster(
    roster: Iterable[Participant],
    window: EventTimeWindow,
    store: AvailabilityStore
) -> List[AvailabilityStatus]:
    """Availability of every roster participant for an event window"""
    return AvailabilityChecker(store).check_roster(roster, window)

def summarize_statuses(statuses: Iterable[AvailabilityStatus]) -> AvailabilitySummary:
    """Counts of available, busy, partial and unknown statuses"""
    return AvailabilityChecker.summarize(statuses)

__all__ = [
    'AvailabilityChecker',
    'AvailabilityState',
    'AvailabilityStatus',
    'AvailabilitySummary',
    'EventTimeWindow',
    'evaluate_participant',
    'evaluate_roster',
    'summarize_statuses'
]
