'''
API endpoints for building an appointment.
'''
from fastapi import APIRouter, HTTPException, status

from ..common.exceptions import StartTimeNotSetError
from ..common.logger import log
from ..core import slot_sequencer, staff_matcher
from ..models import booking as booking_models


class BookingAPI:
    """
    A class to encapsulate the stateless booking helpers.
    The caller owns the slot list and sends it back on every request.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/booking",
            tags=["Booking"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "/toggle",
            self.toggle_service,
            methods=["POST"],
            response_model=list[booking_models.BookingSlot])
        self.router.add_api_route(
            "/staff",
            self.match_staff,
            methods=["POST"],
            response_model=list[booking_models.AvailableStaff])
        self.router.add_api_route(
            "/staff-options",
            self.staff_options,
            methods=["POST"],
            response_model=dict[str, list[booking_models.AvailableStaff]])

    async def toggle_service(
        self,
        request: booking_models.ToggleServiceRequest
    ) -> list[booking_models.BookingSlot]:
        """Adds or removes a service and returns the resequenced slots."""
        try:
            return slot_sequencer.toggle(request.booking_slots, request.service, request.start_time)
        except StartTimeNotSetError as e:
            log.warning(f"Toggle rejected: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Choose a start time before adding services."
            )

    async def match_staff(
        self,
        request: booking_models.StaffMatchRequest
    ) -> list[booking_models.AvailableStaff]:
        """Staff who offer the service and are free for the whole window."""
        return staff_matcher.match_staff(
            request.start_time, request.end_time, request.service_id, request.roster
        )

    async def staff_options(
        self,
        request: booking_models.StaffOptionsRequest
    ) -> dict[str, list[booking_models.AvailableStaff]]:
        return staff_matcher.staff_options_for_slots(request.booking_slots, request.roster)

# Instantiate the class and export its router
booking_api = BookingAPI()
router = booking_api.router
