"""
Boundary payloads for availability data and engine results

The surrounding application stores availability records and candidate
windows as JSON with camelCase keys. These models validate that shape,
convert it to the engine's dataclasses, and serialize results back.
"""

from datetime import datetime, date
from typing import List, Optional, Any

import pytz
from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.helpers import time_to_minutes
from ..services.availability_store import (
    AvailabilityRecord, AvailabilitySlot, Participant, TimeWindow
)
from ..agent.availability_checker import (
    AvailabilityStatus, AvailabilitySummary, EventTimeWindow
)
from ..agent.scheduling_intelligence import TimeSuggestion


def _parse_datetime(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return date_parser.isoparse(value)
        except ValueError as exc:
            raise ValueError(f"Invalid ISO datetime '{value}'") from exc
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ParticipantPayload(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None

    def to_domain(self) -> Participant:
        return Participant(id=self.id, name=self.name, email=self.email, department=self.department)

    @classmethod
    def from_domain(cls, participant: Participant) -> 'ParticipantPayload':
        return cls(
            id=participant.id,
            name=participant.name,
            email=participant.email,
            department=participant.department
        )


class TimeWindowPayload(CamelModel):
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        time_to_minutes(v)
        return v

    @model_validator(mode="after")
    def validate_order(self) -> 'TimeWindowPayload':
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise ValueError("startTime must be before endTime")
        return self

    def to_domain(self) -> TimeWindow:
        return TimeWindow(self.start_time, self.end_time)

    @classmethod
    def from_domain(cls, window: TimeWindow) -> 'TimeWindowPayload':
        return cls(start_time=window.start_time, end_time=window.end_time)


class AvailabilitySlotPayload(CamelModel):
    """
    One slot as the application stores it

    On the wire dayOfWeek counts from 0=Sunday; the domain counts from
    0=Monday. to_domain and from_domain convert between the two.
    """
    id: str
    time_slots: List[TimeWindowPayload] = Field(alias="timeSlots", default_factory=list)
    is_recurring: bool = Field(alias="isRecurring", default=True)
    day_of_week: Optional[int] = Field(alias="dayOfWeek", default=None, ge=0, le=6)
    specific_date: Optional[date] = Field(alias="specificDate", default=None)

    @field_validator("specific_date", mode="before")
    @classmethod
    def parse_specific_date(cls, v: Any) -> Any:
        parsed = _parse_datetime(v)
        return parsed.date() if isinstance(parsed, datetime) else parsed

    @model_validator(mode="after")
    def validate_kind(self) -> 'AvailabilitySlotPayload':
        if self.is_recurring and (self.day_of_week is None or self.specific_date is not None):
            raise ValueError("Recurring slots need dayOfWeek and no specificDate")
        if not self.is_recurring and (self.specific_date is None or self.day_of_week is not None):
            raise ValueError("Specific-date slots need specificDate and no dayOfWeek")
        return self

    def to_domain(self) -> AvailabilitySlot:
        return AvailabilitySlot(
            id=self.id,
            time_windows=[window.to_domain() for window in self.time_slots],
            is_recurring=self.is_recurring,
            day_of_week=None if self.day_of_week is None else (self.day_of_week - 1) % 7,
            specific_date=self.specific_date
        )

    @classmethod
    def from_domain(cls, slot: AvailabilitySlot) -> 'AvailabilitySlotPayload':
        return cls(
            id=slot.id,
            time_slots=[TimeWindowPayload.from_domain(w) for w in slot.time_windows],
            is_recurring=slot.is_recurring,
            day_of_week=None if slot.day_of_week is None else (slot.day_of_week + 1) % 7,
            specific_date=slot.specific_date
        )


class AvailabilityRecordPayload(CamelModel):
    id: Optional[str] = None
    user_id: str = Field(alias="userId")
    availability_slots: List[AvailabilitySlotPayload] = Field(alias="availabilitySlots", default_factory=list)
    timezone: str = "UTC"
    last_updated: Optional[datetime] = Field(alias="lastUpdated", default=None)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone '{v}'")
        return v

    @field_validator("last_updated", mode="before")
    @classmethod
    def parse_last_updated(cls, v: Any) -> Any:
        return _parse_datetime(v)

    def to_domain(self) -> AvailabilityRecord:
        record = AvailabilityRecord(
            user_id=self.user_id,
            slots=[slot.to_domain() for slot in self.availability_slots],
            timezone=self.timezone,
            id=self.id
        )
        if self.last_updated is not None:
            record.last_updated = self.last_updated
        return record


class EventTimeWindowPayload(CamelModel):
    start_date: datetime = Field(alias="startDate")
    end_date: datetime = Field(alias="endDate")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return _parse_datetime(v)

    def to_domain(self) -> EventTimeWindow:
        return EventTimeWindow(start_date=self.start_date, end_date=self.end_date)


class AvailabilityStatusPayload(CamelModel):
    person: ParticipantPayload
    status: str
    conflict_reason: Optional[str] = Field(alias="conflictReason", default=None)
    available_time_slots: List[TimeWindowPayload] = Field(alias="availableTimeSlots", default_factory=list)

    @classmethod
    def from_domain(cls, status: AvailabilityStatus) -> 'AvailabilityStatusPayload':
        return cls(
            person=ParticipantPayload.from_domain(status.participant),
            status=status.status.value,
            conflict_reason=status.reason,
            available_time_slots=[TimeWindowPayload.from_domain(w) for w in status.time_windows]
        )


class AvailabilitySummaryPayload(CamelModel):
    total: int
    available: int
    busy: int
    partial: int
    unknown: int

    @classmethod
    def from_domain(cls, summary: AvailabilitySummary) -> 'AvailabilitySummaryPayload':
        return cls(**summary.as_dict())


class TimeSuggestionPayload(CamelModel):
    date: date
    time: str
    available_count: int = Field(alias="availableCount")
    details: List[AvailabilityStatusPayload]
    score: float
    day_offset: int = Field(alias="dayOffset")
    day_name: str = Field(alias="dayName")

    @classmethod
    def from_domain(cls, suggestion: TimeSuggestion) -> 'TimeSuggestionPayload':
        return cls(
            date=suggestion.date,
            time=suggestion.time_label,
            available_count=suggestion.available_count,
            details=[AvailabilityStatusPayload.from_domain(s) for s in suggestion.statuses],
            score=suggestion.score,
            day_offset=suggestion.day_offset,
            day_name=suggestion.weekday_name
        )


__all__ = [
    'ParticipantPayload',
    'TimeWindowPayload',
    'AvailabilitySlotPayload',
    'AvailabilityRecordPayload',
    'EventTimeWindowPayload',
    'AvailabilityStatusPayload',
    'AvailabilitySummaryPayload',
    'TimeSuggestionPayload'
]
