'''
Builds the WORKING / BREAK / TIME_OFF timeline of one staff member's day.
'''
from datetime import date, datetime
from typing import NamedTuple, Optional, Sequence

from ..common.config import settings
from ..common.logger import log
from ..models.availability import (
    DailyTimeline,
    NoSchedule,
    OnetimeBlock,
    RecurringBreak,
    Schedule,
    TimelineResult,
    TimelineSegment,
)
from ..models.enums import SegmentType
from . import interval_clock as clock


class _Event(NamedTuple):
    offset: int
    delta: int  # +1 opens, -1 closes
    category: SegmentType
    reason: str


def _clip(
    start: datetime,
    end: datetime,
    schedule_start: datetime,
    schedule_end: datetime
) -> Optional[tuple[int, int]]:
    """
    Clips [start, end] to the schedule window and returns minute offsets,
    or None if nothing of it falls inside the window.
    """
    clipped_start = max(start, schedule_start)
    clipped_end = min(end, schedule_end)
    if clipped_start >= clipped_end:
        return None
    start_offset = clock.minutes_between(schedule_start, clipped_start)
    end_offset = clock.minutes_between(schedule_start, clipped_end)
    if start_offset >= end_offset:
        return None
    return start_offset, end_offset


def _segment_type(active_breaks: int, active_time_offs: int) -> SegmentType:
    # time-off always wins over a simultaneous break
    if active_time_offs > 0:
        return SegmentType.TIME_OFF
    if active_breaks > 0:
        return SegmentType.BREAK
    return SegmentType.WORKING


def _append_segment(
    segments: list[TimelineSegment],
    start_minutes: int,
    end_minutes: int,
    segment_type: SegmentType,
    reason: Optional[str],
    schedule_start: datetime
) -> None:
    if end_minutes <= start_minutes:
        return
    previous = segments[-1] if segments else None
    if previous and previous.type == segment_type and previous.reason == reason \
            and previous.end_minutes == start_minutes:
        segments[-1] = previous.model_copy(update={
            'end_minutes': end_minutes,
            'end_time': clock.at_offset(schedule_start, end_minutes),
        })
        return
    segments.append(TimelineSegment(
        start_minutes=start_minutes,
        end_minutes=end_minutes,
        type=segment_type,
        reason=reason,
        start_time=clock.at_offset(schedule_start, start_minutes),
        end_time=clock.at_offset(schedule_start, end_minutes),
    ))


def build_timeline(
    schedule: Optional[Schedule],
    breaks: Sequence[RecurringBreak],
    time_off_blocks: Sequence[OnetimeBlock],
    reference_date: date
) -> TimelineResult:
    """
    Partitions the schedule window of reference_date into typed segments.

    Algorithm:
        1. Anchor the schedule on reference_date.
        2. Clip every break and time-off block to the window, dropping
           the ones that miss it. Time-off blocks are moved to local
           wall-clock first.
        3. Turn each surviving interval into an open/close event pair
           and sort by offset (closings before openings at equal offsets).
        4. Sweep left to right with one counter per category, emitting a
           segment every time the sweep moves forward.

    The reason of a BREAK/TIME_OFF segment is the reason of the most
    recently opened interval of that category. When intervals of the same
    category overlap this is not necessarily the most specific one.

    Returns NoSchedule when schedule is None or does not apply to the date.
    """
    if schedule is None or not schedule.is_effective_on(reference_date):
        log.info(f"No effective schedule on {reference_date}, returning NoSchedule.")
        return NoSchedule(date=reference_date)

    schedule_start = clock.combine(reference_date, schedule.start_time)
    schedule_end = clock.combine(reference_date, schedule.end_time)
    total_minutes = clock.minutes_between(schedule_start, schedule_end)

    events: list[_Event] = []

    for brk in breaks:
        if brk.day_of_week != schedule.day_of_week:
            continue
        window = _clip(
            clock.combine(reference_date, brk.start_time),
            clock.combine(reference_date, brk.end_time),
            schedule_start, schedule_end
        )
        if window is None:
            continue
        reason = brk.reason or settings.DEFAULT_BREAK_REASON
        events.append(_Event(window[0], 1, SegmentType.BREAK, reason))
        events.append(_Event(window[1], -1, SegmentType.BREAK, reason))

    for block in time_off_blocks:
        window = _clip(
            clock.to_local_wall_clock(block.start_date_time),
            clock.to_local_wall_clock(block.end_date_time),
            schedule_start, schedule_end
        )
        if window is None:
            continue
        reason = block.reason or settings.DEFAULT_TIME_OFF_REASON
        events.append(_Event(window[0], 1, SegmentType.TIME_OFF, reason))
        events.append(_Event(window[1], -1, SegmentType.TIME_OFF, reason))

    # stable: openings at the same offset keep input order
    events.sort(key=lambda e: (e.offset, e.delta))

    segments: list[TimelineSegment] = []
    active = {SegmentType.BREAK: 0, SegmentType.TIME_OFF: 0}
    last_reason = {
        SegmentType.BREAK: settings.DEFAULT_BREAK_REASON,
        SegmentType.TIME_OFF: settings.DEFAULT_TIME_OFF_REASON,
    }
    cursor = 0

    def close_segment(until: int) -> None:
        segment_type = _segment_type(active[SegmentType.BREAK], active[SegmentType.TIME_OFF])
        reason = None if segment_type == SegmentType.WORKING else last_reason[segment_type]
        _append_segment(segments, cursor, until, segment_type, reason, schedule_start)

    for event in events:
        if event.offset > cursor:
            close_segment(event.offset)
            cursor = event.offset
        active[event.category] += event.delta
        if event.delta > 0:
            last_reason[event.category] = event.reason

    if cursor < total_minutes:
        close_segment(total_minutes)

    def minutes_of(segment_type: SegmentType) -> int:
        return sum(s.duration_minutes for s in segments if s.type == segment_type)

    return DailyTimeline(
        date=reference_date,
        schedule_start=schedule_start,
        schedule_end=schedule_end,
        total_minutes=total_minutes,
        segments=segments,
        working_minutes=minutes_of(SegmentType.WORKING),
        break_minutes=minutes_of(SegmentType.BREAK),
        time_off_minutes=minutes_of(SegmentType.TIME_OFF),
    )
