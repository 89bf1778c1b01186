'''
API endpoints for staff availability.
'''
from typing import Annotated

from fastapi import APIRouter, Depends

from ..core import coverage
from ..models import availability as availability_models
from ..services.availability_service import AvailabilityService


class AvailabilityAPI:
    """
    A class to encapsulate endpoints for a staff member's daily availability.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/availability",
            tags=["Availability"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "/daily",
            self.get_daily_availability,
            methods=["POST"],
            response_model=availability_models.DailyAvailability)
        self.router.add_api_route(
            "/coverage",
            self.get_coverage,
            methods=["POST"],
            response_model=availability_models.CoverageResponse)

    async def get_daily_availability(
        self,
        request: availability_models.DailyAvailabilityRequest,
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)]
    ) -> availability_models.DailyAvailability:
        """
        Builds the timeline of one employee's day from the records in the body.
        A day without a schedule comes back with a `no_schedule` timeline.
        """
        return availability_service.get_daily_availability(
            employee_id=request.employee_id,
            target_date=request.date,
            schedules=request.schedules,
            breaks=request.breaks,
            onetime_blocks=request.onetime_blocks
        )

    async def get_coverage(
        self,
        request: availability_models.CoverageRequest
    ) -> availability_models.CoverageResponse:
        """Reports whether time-off swallows the schedule and where it overlaps."""
        return availability_models.CoverageResponse(
            fully_covered=coverage.is_fully_covered(request.schedule, request.onetime_blocks, request.date),
            overlapping_time_off=coverage.overlapping_time_off(request.schedule, request.onetime_blocks, request.date)
        )

# Instantiate the class and export its router
availability_api = AvailabilityAPI()
router = availability_api.router
