'''
Availability Models
'''
from typing import Literal, Optional, Union
from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import DayOfWeek, SegmentType
from ..core.interval_clock import parse_time_of_day


# --- Inbound Records (from the employee service) ---

class Schedule(BaseModel):
    """
    One recurring working window of a staff member.
    Effective on dates inside [valid_from, valid_until] whose weekday matches.
    """
    id: UUID
    employee_id: UUID
    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday, 6=Saturday")
    start_time: time
    end_time: time
    valid_from: date
    valid_until: Optional[date] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def _clock_part_only(cls, value):
        return parse_time_of_day(value)

    @model_validator(mode='after')
    def validate_window(self) -> 'Schedule':
        if self.start_time >= self.end_time:
            raise ValueError('start_time must be before end_time')
        if self.valid_until is not None and self.valid_until < self.valid_from:
            raise ValueError('valid_until cannot be before valid_from')
        return self

    def is_effective_on(self, day: date) -> bool:
        if DayOfWeek.of(day) != self.day_of_week:
            return False
        if day < self.valid_from:
            return False
        if self.valid_until is not None and day > self.valid_until:
            return False
        return True


class RecurringBreak(BaseModel):
    """A weekly recurring unavailable window, e.g. lunch."""
    id: UUID
    employee_id: UUID
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: time
    end_time: time
    reason: str = ""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator('start_time', 'end_time', mode='before')
    @classmethod
    def _clock_part_only(cls, value):
        return parse_time_of_day(value)

    @model_validator(mode='after')
    def validate_window(self) -> 'RecurringBreak':
        if self.start_time >= self.end_time:
            raise ValueError('start_time must be before end_time')
        return self


class OnetimeBlock(BaseModel):
    """An absolute-dated unavailability window (vacation, sick leave)."""
    id: UUID
    employee_id: UUID
    start_date_time: datetime
    end_date_time: datetime
    reason: str = ""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @model_validator(mode='after')
    def validate_window(self) -> 'OnetimeBlock':
        if self.start_date_time >= self.end_date_time:
            raise ValueError('start_date_time must be before end_date_time')
        return self


# --- Derived Models ---

class TimelineSegment(BaseModel):
    """
    A typed sub-interval of a day's schedule.
    Offsets are minutes from the schedule start.
    """
    start_minutes: int
    end_minutes: int
    type: SegmentType
    reason: Optional[str] = None
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(frozen=True)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes


class DailyTimeline(BaseModel):
    """The ordered WORKING/BREAK/TIME_OFF partition of one schedule window."""
    kind: Literal["timeline"] = "timeline"
    date: date
    schedule_start: datetime
    schedule_end: datetime
    total_minutes: int
    segments: list[TimelineSegment]
    working_minutes: int
    break_minutes: int
    time_off_minutes: int

    model_config = ConfigDict(frozen=True)


class NoSchedule(BaseModel):
    """Returned instead of a timeline when the staff member has no schedule that day."""
    kind: Literal["no_schedule"] = "no_schedule"
    date: date
    message: str = "No schedule available for this date"

    model_config = ConfigDict(frozen=True)


TimelineResult = Union[DailyTimeline, NoSchedule]


class TimeOffOverlap(BaseModel):
    """A time-off block clipped to a schedule, as local time of day."""
    reason: str
    start_time: time
    end_time: time

    model_config = ConfigDict(frozen=True)


class DailyAvailability(BaseModel):
    """Everything the availability tab needs for one staff member on one date."""
    employee_id: UUID
    date: date
    timeline: TimelineResult = Field(..., discriminator='kind')
    fully_covered: bool
    overlapping_time_off: list[TimeOffOverlap] = Field(default_factory=list)


# --- API Request/Response Models ---

class DailyAvailabilityRequest(BaseModel):
    employee_id: UUID
    date: date
    schedules: list[Schedule] = Field(default_factory=list)
    breaks: list[RecurringBreak] = Field(default_factory=list)
    onetime_blocks: list[OnetimeBlock] = Field(default_factory=list)


class CoverageRequest(BaseModel):
    date: date
    schedule: Optional[Schedule] = None
    onetime_blocks: list[OnetimeBlock] = Field(default_factory=list)


class CoverageResponse(BaseModel):
    fully_covered: bool
    overlapping_time_off: list[TimeOffOverlap]
