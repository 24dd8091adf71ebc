"""
Availability Store - declared participant availability

Holds each participant's availability record (recurring weekly windows and
one-off specific-date windows) and answers lookups by weekday or date.
Records are treated as read-only inputs; the store never mutates them.
"""

import logging
from typing import Dict, List, Optional, Iterable
from datetime import datetime, date
from dataclasses import dataclass, field

from ..utils.helpers import time_to_minutes, get_day_name

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Participant:
    """Person invited to an event"""
    id: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None

@dataclass(frozen=True)
class TimeWindow:
    """Half-open wall-clock window [start_time, end_time) in "HH:MM" form"""
    start_time: str
    end_time: str

    def __post_init__(self):
        if self.start_minutes >= self.end_minutes:
            raise ValueError(
                f"Time window start {self.start_time} must be before end {self.end_time}"
            )

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)

@dataclass
class AvailabilitySlot:
    """One weekday's (recurring) or one specific date's list of open windows"""
    id: str
    time_windows: List[TimeWindow]
    is_recurring: bool = True
    day_of_week: Optional[int] = None  # 0=Monday, 6=Sunday
    specific_date: Optional[date] = None

    def __post_init__(self):
        if self.is_recurring:
            if self.day_of_week is None or self.specific_date is not None:
                raise ValueError(f"Recurring slot {self.id} needs a day_of_week and no specific_date")
            if not 0 <= self.day_of_week <= 6:
                raise ValueError(f"Slot {self.id} has invalid day_of_week {self.day_of_week}")
        elif self.specific_date is None or self.day_of_week is not None:
            raise ValueError(f"Specific-date slot {self.id} needs a specific_date and no day_of_week")

@dataclass
class AvailabilityRecord:
    """Full set of a participant's declared availability"""
    user_id: str
    slots: List[AvailabilitySlot] = field(default_factory=list)
    timezone: str = "UTC"  # informational only
    last_updated: datetime = field(default_factory=datetime.now)
    id: Optional[str] = None

    def __post_init__(self):
        seen_days = set()
        for slot in self.slots:
            if not slot.is_recurring:
                continue
            if slot.day_of_week in seen_days:
                raise ValueError(
                    f"User {self.user_id} has more than one recurring slot for "
                    f"{get_day_name(slot.day_of_week)}"
                )
            seen_days.add(slot.day_of_week)

    def recurring_windows(self, day_of_week: int) -> List[TimeWindow]:
        for slot in self.slots:
            if slot.is_recurring and slot.day_of_week == day_of_week:
                return list(slot.time_windows)
        return []

    def date_windows(self, on_date: date) -> List[TimeWindow]:
        windows: List[TimeWindow] = []
        for slot in self.slots:
            if not slot.is_recurring and slot.specific_date == on_date:
                windows.extend(slot.time_windows)
        return windows

class AvailabilityStore:
    """
    Read-only lookup over participants' availability records

    Records are keyed by user id. A participant without a record has no
    declared availability at all.
    """

    def __init__(self, records: Optional[Iterable[AvailabilityRecord]] = None):
        self._records: Dict[str, AvailabilityRecord] = {}
        for record in records or []:
            self._records[record.user_id] = record
        logger.debug(f"Availability store loaded with {len(self._records)} records")

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get_record(self, user_id: str) -> Optional[AvailabilityRecord]:
        return self._records.get(user_id)

    def get_weekday_windows(self, user_id: str, day_of_week: int) -> List[TimeWindow]:
        """Recurring windows a participant declared for a weekday (0=Monday)"""
        record = self._records.get(user_id)
        if record is None:
            return []
        return record.recurring_windows(day_of_week)

    def get_date_windows(self, user_id: str, on_date: date) -> List[TimeWindow]:
        """Specific-date windows a participant declared for one calendar date.

        The availability checker does not consult these yet; see DESIGN.md.
        """
        record = self._records.get(user_id)
        if record is None:
            return []
        return record.date_windows(on_date)

# =============================================================================
# Presets
# =============================================================================

def create_default_slot(day_of_week: int) -> AvailabilitySlot:
    """Recurring 09:00-17:00 slot for one weekday"""
    return AvailabilitySlot(
        id=f"day-{day_of_week}",
        day_of_week=day_of_week,
        time_windows=[TimeWindow("09:00", "17:00")],
        is_recurring=True
    )

def _weekly(prefix: str, windows_by_day: Dict[int, List[TimeWindow]]) -> List[AvailabilitySlot]:
    return [
        AvailabilitySlot(id=f"{prefix}-{day}", day_of_week=day, time_windows=list(windows))
        for day, windows in windows_by_day.items()
    ]

_WORKDAYS = range(0, 5)
_WITH_LUNCH = [TimeWindow("09:00", "12:00"), TimeWindow("13:00", "17:00")]

AVAILABILITY_PRESETS: Dict[str, Dict[str, object]] = {
    "full_time": {
        "name": "Full time (9-17)",
        "description": "Monday to Friday, 9:00-17:00 with a lunch break",
        "slots": _weekly("full-time", {
            **{day: _WITH_LUNCH for day in range(0, 4)},
            4: [TimeWindow("09:00", "12:00"), TimeWindow("13:00", "16:00")],
        }),
    },
    "part_time": {
        "name": "Part time (9-13)",
        "description": "Monday to Friday, mornings only",
        "slots": _weekly("part-time", {day: [TimeWindow("09:00", "13:00")] for day in _WORKDAYS}),
    },
    "flexible": {
        "name": "Flexible hours",
        "description": "Availability varies from day to day",
        "slots": _weekly("flex", {
            0: [TimeWindow("10:00", "16:00")],
            1: [TimeWindow("08:00", "12:00"), TimeWindow("14:00", "18:00")],
            2: [TimeWindow("09:00", "15:00")],
            3: [TimeWindow("11:00", "17:00")],
            4: [TimeWindow("09:00", "14:00")],
        }),
    },
}

def _copy_slot(slot: AvailabilitySlot) -> AvailabilitySlot:
    return AvailabilitySlot(
        id=slot.id,
        time_windows=list(slot.time_windows),
        is_recurring=slot.is_recurring,
        day_of_week=slot.day_of_week,
        specific_date=slot.specific_date
    )

def record_from_preset(user_id: str, preset: str, timezone: str = "UTC") -> AvailabilityRecord:
    """Build an availability record from one of AVAILABILITY_PRESETS"""
    if preset not in AVAILABILITY_PRESETS:
        raise KeyError(f"Unknown availability preset: {preset}")
    return AvailabilityRecord(
        user_id=user_id,
        slots=[_copy_slot(slot) for slot in AVAILABILITY_PRESETS[preset]["slots"]],
        timezone=timezone,
        id=f"{user_id}-{preset}"
    )

__all__ = [
    'Participant',
    'TimeWindow',
    'AvailabilitySlot',
    'AvailabilityRecord',
    'AvailabilityStore',
    'AVAILABILITY_PRESETS',
    'create_default_slot',
    'record_from_preset'
]
