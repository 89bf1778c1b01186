'''
Availability Service
'''
from datetime import date, datetime, timedelta
from typing import Optional, Sequence
from uuid import UUID

from ..common.logger import log
from ..core import coverage
from ..core import interval_clock as clock
from ..core.timeline import build_timeline
from ..models import availability as availability_models
from ..models.enums import DayOfWeek


class AvailabilityService:
    """
    Builds a staff member's availability picture for one date out of the
    schedule, break and time-off records fetched from the employee service.
    Stateless; the records are passed in on every call.
    """

    # --- Record Selection ---

    def select_schedule(
        self,
        schedules: Sequence[availability_models.Schedule],
        target_date: date
    ) -> Optional[availability_models.Schedule]:
        """
        Picks the schedule in force on target_date.
        If several validity ranges overlap the most recently started one wins.
        """
        effective = [s for s in schedules if s.is_effective_on(target_date)]
        if not effective:
            return None
        if len(effective) > 1:
            log.warning(
                f"{len(effective)} schedules apply on {target_date}, "
                f"using the one valid from the latest date."
            )
        return max(effective, key=lambda s: s.valid_from)

    def breaks_for_day(
        self,
        breaks: Sequence[availability_models.RecurringBreak],
        target_date: date
    ) -> list[availability_models.RecurringBreak]:
        day = DayOfWeek.of(target_date)
        return [b for b in breaks if b.day_of_week == day]

    def blocks_for_date(
        self,
        blocks: Sequence[availability_models.OnetimeBlock],
        target_date: date
    ) -> list[availability_models.OnetimeBlock]:
        """Blocks whose local interval touches any part of target_date."""
        day_start = datetime.combine(target_date, datetime.min.time())
        day_end = day_start + timedelta(days=1)
        return [
            b for b in blocks
            if clock.to_local_wall_clock(b.start_date_time) < day_end
            and clock.to_local_wall_clock(b.end_date_time) > day_start
        ]

    def _own_records(self, records: Sequence, employee_id: UUID, kind: str) -> list:
        own = [r for r in records if r.employee_id == employee_id]
        if len(own) != len(records):
            log.warning(
                f"Ignoring {len(records) - len(own)} {kind} record(s) "
                f"that do not belong to employee {employee_id}."
            )
        return own

    # --- Main Method ---

    def get_daily_availability(
        self,
        employee_id: UUID,
        target_date: date,
        schedules: Sequence[availability_models.Schedule],
        breaks: Sequence[availability_models.RecurringBreak],
        onetime_blocks: Sequence[availability_models.OnetimeBlock]
    ) -> availability_models.DailyAvailability:
        """
        Algorithm:
            1. Keep only the employee's own records.
            2. Pick the schedule in force on the date.
            3. Keep the breaks of that weekday and the blocks touching the date.
            4. Build the timeline and the time-off coverage.
        """
        schedules = self._own_records(schedules, employee_id, "schedule")
        breaks = self._own_records(breaks, employee_id, "break")
        onetime_blocks = self._own_records(onetime_blocks, employee_id, "time-off")

        schedule = self.select_schedule(schedules, target_date)
        day_breaks = self.breaks_for_day(breaks, target_date)
        day_blocks = self.blocks_for_date(onetime_blocks, target_date)

        timeline = build_timeline(schedule, day_breaks, day_blocks, target_date)

        if isinstance(timeline, availability_models.NoSchedule):
            log.info(f"Employee {employee_id} has no schedule on {target_date}.")
        else:
            log.info(
                f"Employee {employee_id} on {target_date}: "
                f"{len(timeline.segments)} segment(s), {timeline.working_minutes} working minute(s)."
            )

        return availability_models.DailyAvailability(
            employee_id=employee_id,
            date=target_date,
            timeline=timeline,
            fully_covered=coverage.is_fully_covered(schedule, day_blocks, target_date),
            overlapping_time_off=coverage.overlapping_time_off(schedule, day_blocks, target_date),
        )
