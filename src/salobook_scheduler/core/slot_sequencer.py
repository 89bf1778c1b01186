'''
Sequences the services of one appointment into back-to-back slots.
'''
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..common.exceptions import StartTimeNotSetError
from ..common.logger import log
from ..models.booking import BookingSlot, Service


def _require_start(base_start_time: Optional[datetime]) -> datetime:
    if base_start_time is None:
        raise StartTimeNotSetError("startTime is not set")
    return base_start_time


def _chain(
    slots: Sequence[BookingSlot],
    durations: Sequence[timedelta],
    base_start_time: datetime
) -> list[BookingSlot]:
    """Lays slots end to end from base_start_time in list order."""
    recomputed = []
    cursor = base_start_time
    for slot, duration in zip(slots, durations):
        end = cursor + duration
        recomputed.append(slot.model_copy(update={'start_time': cursor, 'end_time': end}))
        cursor = end
    return recomputed


def resequence(
    slots: Sequence[BookingSlot],
    base_start_time: Optional[datetime]
) -> list[BookingSlot]:
    """Re-anchors slots on base_start_time, each keeping its own duration."""
    start = _require_start(base_start_time)
    return _chain(slots, [s.end_time - s.start_time for s in slots], start)


def toggle(
    current_slots: Sequence[BookingSlot],
    service: Service,
    base_start_time: Optional[datetime]
) -> list[BookingSlot]:
    """
    Adds the service if it is not booked yet, removes it otherwise, then
    recomputes every slot so they run back to back from base_start_time.

    New slots go to the tail. Slots that were already booked keep the
    duration they currently span; only the new slot takes its duration
    from the catalog entry.

    Raises:
        StartTimeNotSetError: if base_start_time is None.
    """
    start = _require_start(base_start_time)
    exists = any(s.service_id == service.service_id for s in current_slots)

    if exists:
        reduced = [s for s in current_slots if s.service_id != service.service_id]
        durations = [s.end_time - s.start_time for s in reduced]
        log.info(f"Removed service {service.service_id}, {len(reduced)} slot(s) left.")
    else:
        new_duration = timedelta(minutes=service.duration)
        new_slot = BookingSlot(
            service_id=service.service_id,
            staff_id="",
            start_time=start,
            end_time=start + new_duration,
            is_packaged=service.is_packaged,
        )
        reduced = [*current_slots, new_slot]
        durations = [s.end_time - s.start_time for s in current_slots] + [new_duration]
        log.info(f"Added service {service.service_id}, {len(reduced)} slot(s) booked.")

    return _chain(reduced, durations, start)


def move_slot(
    slots: Sequence[BookingSlot],
    service_id: str,
    new_index: int,
    base_start_time: Optional[datetime]
) -> list[BookingSlot]:
    """
    Moves one slot to new_index (drag and drop) and resequences.
    An unknown service id leaves the order untouched.
    """
    ordered = list(slots)
    old_index = next((i for i, s in enumerate(ordered) if s.service_id == service_id), None)
    if old_index is None:
        log.warning(f"Cannot move service {service_id}: it is not booked.")
    else:
        new_index = max(0, min(new_index, len(ordered) - 1))
        ordered.insert(new_index, ordered.pop(old_index))
    return resequence(ordered, base_start_time)


def assign_staff(
    slots: Sequence[BookingSlot],
    service_id: str,
    staff_id: str
) -> list[BookingSlot]:
    """Sets the staff member of the slot booked for service_id."""
    if not any(s.service_id == service_id for s in slots):
        log.warning(f"Cannot assign staff {staff_id}: service {service_id} is not booked.")
    return [
        s.model_copy(update={'staff_id': staff_id}) if s.service_id == service_id else s
        for s in slots
    ]


def total_price(
    slots: Sequence[BookingSlot],
    catalog: Mapping[str, Service]
) -> Decimal:
    """
    Sums catalog prices of the booked services. Services that dropped out
    of the catalog count as zero.
    """
    total = Decimal("0")
    for slot in slots:
        service = catalog.get(slot.service_id)
        if service is None:
            log.warning(f"Service {slot.service_id} not found in catalog, pricing it as 0.")
            continue
        total += service.price
    return total
