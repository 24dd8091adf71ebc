"""
Schedule Assist - participant availability and event layout engine

Public operations:
- evaluate_participant / evaluate_roster / summarize_statuses
- suggest_times
- group_overlapping_events
"""

from .agent.availability_checker import (
    AvailabilityChecker,
    AvailabilityState,
    AvailabilityStatus,
    AvailabilitySummary,
    EventTimeWindow,
    evaluate_participant,
    evaluate_roster,
    summarize_statuses,
)
from .agent.scheduling_intelligence import SchedulingIntelligence, TimeSuggestion, suggest_times
from .agent.event_layout import LayoutEvent, group_overlapping_events
from .services.availability_store import (
    AvailabilityRecord,
    AvailabilitySlot,
    AvailabilityStore,
    Participant,
    TimeWindow,
)

__version__ = "0.1.0"

__all__ = [
    'AvailabilityChecker',
    'AvailabilityState',
    'AvailabilityStatus',
    'AvailabilitySummary',
    'EventTimeWindow',
    'evaluate_participant',
    'evaluate_roster',
    'summarize_statuses',
    'SchedulingIntelligence',
    'TimeSuggestion',
    'suggest_times',
    'LayoutEvent',
    'group_overlapping_events',
    'AvailabilityRecord',
    'AvailabilitySlot',
    'AvailabilityStore',
    'Participant',
    'TimeWindow',
]
