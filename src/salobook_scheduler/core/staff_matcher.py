'''
Matches staff to booking slots by capability and free time.
'''
from datetime import datetime
from typing import Sequence

from ..common.exceptions import EmptyBookingError
from ..common.logger import log
from ..models.booking import AvailableStaff, BookingSlot, StaffAvailabilityRequest
from . import interval_clock as clock


def _is_free_for(staff: AvailableStaff, slot_start: datetime, slot_end: datetime) -> bool:
    # full containment on the local wall clock, a partial overlap is not enough
    start = clock.to_local_wall_clock(slot_start)
    end = clock.to_local_wall_clock(slot_end)
    return any(
        clock.to_local_wall_clock(window.start) <= start
        and end <= clock.to_local_wall_clock(window.end)
        for window in staff.availability
    )


def match_staff(
    slot_start: datetime,
    slot_end: datetime,
    service_id: str,
    roster: Sequence[AvailableStaff]
) -> list[AvailableStaff]:
    """
    Returns the roster members who offer service_id and have one free
    window containing [slot_start, slot_end]. Roster order is kept.
    An empty list means nobody qualifies.
    """
    return [
        staff for staff in roster
        if service_id in staff.service_ids and _is_free_for(staff, slot_start, slot_end)
    ]


def staff_options_for_slots(
    slots: Sequence[BookingSlot],
    roster: Sequence[AvailableStaff]
) -> dict[str, list[AvailableStaff]]:
    """Qualifying staff for every slot, keyed by service id."""
    return {
        slot.service_id: match_staff(slot.start_time, slot.end_time, slot.service_id, roster)
        for slot in slots
    }


def find_staff(roster: Sequence[AvailableStaff], staff_id: str) -> AvailableStaff | None:
    """Looks a staff member up by id. Unknown ids resolve to None."""
    for staff in roster:
        if staff.staff_id == staff_id:
            return staff
    log.warning(f"Staff {staff_id} is not in the current roster.")
    return None


def staff_request_for(slots: Sequence[BookingSlot]) -> StaffAvailabilityRequest:
    """
    Builds the roster query for an appointment: every booked service and
    the window from the first slot's start to the last slot's end.
    """
    if not slots:
        raise EmptyBookingError("No booking slots available to fetch staff.")
    return StaffAvailabilityRequest(
        service_ids=[slot.service_id for slot in slots],
        start_time=slots[0].start_time,
        end_time=slots[-1].end_time,
    )
