'''
How much of a schedule is displaced by time-off.
'''
from datetime import date
from typing import Optional, Sequence

from ..common.config import settings
from ..models.availability import OnetimeBlock, Schedule, TimeOffOverlap
from . import interval_clock as clock


def is_fully_covered(
    schedule: Optional[Schedule],
    blocks: Sequence[OnetimeBlock],
    target_date: date
) -> bool:
    """
    True if a single block encloses the whole schedule window on target_date.
    Several blocks that only cover it together do not count.
    """
    if schedule is None or not blocks:
        return False

    schedule_start = clock.combine(target_date, schedule.start_time)
    schedule_end = clock.combine(target_date, schedule.end_time)

    return any(
        clock.to_local_wall_clock(block.start_date_time) <= schedule_start
        and clock.to_local_wall_clock(block.end_date_time) >= schedule_end
        for block in blocks
    )


def overlapping_time_off(
    schedule: Optional[Schedule],
    blocks: Sequence[OnetimeBlock],
    target_date: date
) -> list[TimeOffOverlap]:
    """Clips each block to the schedule window; blocks that miss it are dropped."""
    if schedule is None or not blocks:
        return []

    schedule_start = clock.combine(target_date, schedule.start_time)
    schedule_end = clock.combine(target_date, schedule.end_time)

    overlaps = []
    for block in blocks:
        overlap_start = max(schedule_start, clock.to_local_wall_clock(block.start_date_time))
        overlap_end = min(schedule_end, clock.to_local_wall_clock(block.end_date_time))
        if overlap_start < overlap_end:
            overlaps.append(TimeOffOverlap(
                reason=block.reason or settings.DEFAULT_TIME_OFF_REASON,
                start_time=overlap_start.time(),
                end_time=overlap_end.time(),
            ))
    return overlaps
