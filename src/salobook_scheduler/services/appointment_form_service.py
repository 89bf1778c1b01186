'''
Appointment Form Service
'''
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from ..common.exceptions import BookingValidationError
from ..common.logger import log
from ..core import slot_sequencer
from ..core import staff_matcher
from ..core.serializer import Serializer
from ..models import booking as booking_models


class AppointmentFormState(BaseModel):
    """Snapshot of one appointment under construction."""
    start_time: Optional[datetime] = None
    booking_slots: tuple[booking_models.BookingSlot, ...] = ()
    available_staff: tuple[booking_models.AvailableStaff, ...] = ()

    model_config = ConfigDict(frozen=True)


def _is_field_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


class AppointmentFormService:
    """
    Owns the state of one appointment being booked.

    Every change to the slot list goes through a Serializer, so rapid
    add/remove clicks are applied one after the other against the latest
    list instead of racing on a stale copy.
    """
    def __init__(self, serializer: Optional[Serializer] = None):
        self.serializer = serializer or Serializer(name="appointment-form")
        self.state = AppointmentFormState()

    # --- Plain Setters ---

    def set_available_staff(self, roster: Sequence[booking_models.AvailableStaff]) -> None:
        self.state = self.state.model_copy(update={"available_staff": tuple(roster)})

    def _store_slots(self, slots: Sequence[booking_models.BookingSlot]) -> None:
        self.state = self.state.model_copy(update={"booking_slots": tuple(slots)})

    # --- Serialized Mutations ---

    async def set_start_time(self, start_time: Optional[datetime]) -> list[booking_models.BookingSlot]:
        """Sets the appointment start and moves already booked slots along with it."""
        async def run() -> list[booking_models.BookingSlot]:
            slots = list(self.state.booking_slots)
            if start_time is not None and slots:
                slots = slot_sequencer.resequence(slots, start_time)
            self.state = self.state.model_copy(
                update={"start_time": start_time, "booking_slots": tuple(slots)}
            )
            return slots

        return await self.serializer.enqueue(run)

    async def toggle_service(self, service: booking_models.Service) -> list[booking_models.BookingSlot]:
        """
        Adds or removes a service. The current slots and start time are read
        when the operation actually runs, not when it is enqueued.
        """
        async def run() -> list[booking_models.BookingSlot]:
            slots = slot_sequencer.toggle(
                self.state.booking_slots, service, self.state.start_time
            )
            self._store_slots(slots)
            return slots

        return await self.serializer.enqueue(run)

    async def move_service(self, service_id: str, new_index: int) -> list[booking_models.BookingSlot]:
        async def run() -> list[booking_models.BookingSlot]:
            slots = slot_sequencer.move_slot(
                self.state.booking_slots, service_id, new_index, self.state.start_time
            )
            self._store_slots(slots)
            return slots

        return await self.serializer.enqueue(run)

    async def assign_staff(self, service_id: str, staff_id: str) -> list[booking_models.BookingSlot]:
        async def run() -> list[booking_models.BookingSlot]:
            if staff_matcher.find_staff(self.state.available_staff, staff_id) is None:
                log.info(f"Assigning staff {staff_id} who is not in the loaded roster.")
            slots = slot_sequencer.assign_staff(self.state.booking_slots, service_id, staff_id)
            self._store_slots(slots)
            return slots

        return await self.serializer.enqueue(run)

    async def reset(self) -> None:
        """Back to an empty form, after any change already queued."""
        async def run() -> None:
            self.state = AppointmentFormState()

        await self.serializer.enqueue(run)

    # --- Derived Data ---

    def staff_options(self) -> dict[str, list[booking_models.AvailableStaff]]:
        return staff_matcher.staff_options_for_slots(
            self.state.booking_slots, self.state.available_staff
        )

    def staff_request(self) -> booking_models.StaffAvailabilityRequest:
        return staff_matcher.staff_request_for(self.state.booking_slots)

    def build_booking_form(
        self,
        customer_name: str,
        customer_number: str,
        catalog: Mapping[str, booking_models.Service],
        customer_id: Optional[str] = None,
        advance_payment: Optional[Decimal] = None,
        notes: Optional[str] = None
    ) -> booking_models.BookingForm:
        """
        Builds the appointment-creation payload. Slot order is the
        sequencing order.

        Raises:
            BookingValidationError: naming the first compulsory field that is empty.
        """
        slots = list(self.state.booking_slots)
        total = slot_sequencer.total_price(slots, catalog)

        required = {
            "customer_name": customer_name,
            "customer_number": customer_number,
            "booking_slots": slots,
            "total_price": total if slots else None,
        }
        for field_name, value in required.items():
            if _is_field_empty(value):
                raise BookingValidationError(field_name)

        return booking_models.BookingForm(
            customer_id=customer_id,
            customer_name=customer_name.strip(),
            customer_number=customer_number.strip(),
            total_price=total,
            advance_payment=advance_payment,
            notes=notes,
            booking_slots=slots,
        )
