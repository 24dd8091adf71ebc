"""Builders shared by the engine tests."""

from datetime import datetime

from schedule_assist.services.availability_store import (
    AvailabilityRecord,
    AvailabilitySlot,
    TimeWindow,
)

# 2025-01-06 is a Monday
MONDAY = datetime(2025, 1, 6)
ALL_WEEK = range(7)


def at(day: datetime, hhmm: str) -> datetime:
    """Datetime on the given day at an "HH:MM" time."""
    hours, minutes = hhmm.split(":")
    return day.replace(hour=int(hours), minute=int(minutes), second=0, microsecond=0)


def weekly(user_id: str, days, *windows) -> AvailabilityRecord:
    """Record with the same recurring windows on each of the given weekdays."""
    return AvailabilityRecord(
        user_id=user_id,
        slots=[
            AvailabilitySlot(
                id=f"{user_id}-{day}",
                day_of_week=day,
                time_windows=[TimeWindow(start, end) for start, end in windows],
            )
            for day in days
        ],
    )
