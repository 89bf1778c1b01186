'''
Booking Models
'''
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Service(BaseModel):
    """A catalog entry. Duration is in minutes."""
    service_id: str
    service_name: Optional[str] = None
    duration: int = Field(..., gt=0, description="Duration in minutes")
    price: Decimal = Field(Decimal("0"), ge=0)
    is_packaged: bool = False

    model_config = ConfigDict(from_attributes=True, frozen=True)


class BookingSlot(BaseModel):
    """
    One service occurrence inside the appointment being built.
    The position of a slot in its list is its sequencing order.
    """
    service_id: str
    staff_id: str = ""
    start_time: datetime
    end_time: datetime
    is_packaged: bool = False

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @model_validator(mode='after')
    def validate_window(self) -> 'BookingSlot':
        if self.end_time < self.start_time:
            raise ValueError('end_time cannot be before start_time')
        return self


class AvailabilityWindow(BaseModel):
    start: datetime
    end: datetime

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_window(self) -> 'AvailabilityWindow':
        if self.start >= self.end:
            raise ValueError('start must be before end')
        return self


class AvailableStaff(BaseModel):
    """
    Snapshot of one staff member for a query window: what they can do
    and when they are free.
    """
    staff_id: str
    service_ids: frozenset[str] = Field(default_factory=frozenset)
    availability: tuple[AvailabilityWindow, ...] = ()

    model_config = ConfigDict(from_attributes=True, frozen=True)


class StaffAvailabilityRequest(BaseModel):
    """The window and services sent to the booking service to fetch a roster."""
    service_ids: list[str]
    start_time: datetime
    end_time: datetime


class BookingForm(BaseModel):
    """Outbound appointment-creation payload."""
    customer_id: Optional[str] = None
    customer_name: str
    customer_number: str
    total_price: Decimal
    advance_payment: Optional[Decimal] = None
    notes: Optional[str] = None
    booking_slots: list[BookingSlot]


# --- API Request Models ---

class ToggleServiceRequest(BaseModel):
    booking_slots: list[BookingSlot] = Field(default_factory=list)
    service: Service
    start_time: Optional[datetime] = None


class StaffMatchRequest(BaseModel):
    start_time: datetime
    end_time: datetime
    service_id: str
    roster: list[AvailableStaff] = Field(default_factory=list)


class StaffOptionsRequest(BaseModel):
    booking_slots: list[BookingSlot] = Field(default_factory=list)
    roster: list[AvailableStaff] = Field(default_factory=list)
