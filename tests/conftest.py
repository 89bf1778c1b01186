'''
Pytest configuration for the scheduler.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE before the app is imported.
2. Providing a FastAPI TestClient for endpoint testing.
3. Providing record factories and a small service catalog / staff roster.
4. Providing instances of the service classes.
'''

import os
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional
from uuid import uuid4

import pytest

os.environ["TEST_MODE"] = "True"

# --- FastAPI & Testing Imports ---
from fastapi.testclient import TestClient

# --- Constant Imports ----
from tests.constants import (
    TEST_EMPLOYEE_ID,
    TEST_SCHEDULE_ID,
    TEST_DAY_OF_WEEK,
    HAIRCUT_ID,
    SHAVE_ID,
    FACIAL_ID,
    BRIDAL_PACKAGE_ID,
    STAFF_X_ID,
    STAFF_Y_ID,
    STAFF_Z_ID,
)

# --- Application Imports ---
from salobook_scheduler.main import app
from salobook_scheduler.common.config import settings
from salobook_scheduler.models.availability import OnetimeBlock, RecurringBreak, Schedule
from salobook_scheduler.models.booking import AvailabilityWindow, AvailableStaff, Service
from salobook_scheduler.services.availability_service import AvailabilityService
from salobook_scheduler.services.appointment_form_service import AppointmentFormService


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    Forces 'asyncio' and promotes the scope to 'session'.
    """
    return "asyncio"


@pytest.fixture(scope="function")
def client() -> TestClient:
    """Runs the app's lifespan and yields a TestClient."""
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your .env file or environment."

    with TestClient(app) as test_client:
        yield test_client


# --- Record Factories ---

@pytest.fixture
def make_schedule():
    def _make(
        start: time = time(9, 0),
        end: time = time(17, 0),
        day_of_week: int = TEST_DAY_OF_WEEK,
        valid_from: date = date(2025, 1, 1),
        valid_until: Optional[date] = None,
        employee_id=TEST_EMPLOYEE_ID,
        schedule_id=None,
    ) -> Schedule:
        return Schedule(
            id=schedule_id or TEST_SCHEDULE_ID,
            employee_id=employee_id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            valid_from=valid_from,
            valid_until=valid_until,
        )
    return _make


@pytest.fixture
def make_break():
    def _make(
        start: time,
        end: time,
        reason: str = "Lunch",
        day_of_week: int = TEST_DAY_OF_WEEK,
        employee_id=TEST_EMPLOYEE_ID,
    ) -> RecurringBreak:
        return RecurringBreak(
            id=uuid4(),
            employee_id=employee_id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            reason=reason,
        )
    return _make


@pytest.fixture
def make_block():
    def _make(
        start: datetime,
        end: datetime,
        reason: str = "Vacation",
        employee_id=TEST_EMPLOYEE_ID,
    ) -> OnetimeBlock:
        return OnetimeBlock(
            id=uuid4(),
            employee_id=employee_id,
            start_date_time=start,
            end_date_time=end,
            reason=reason,
        )
    return _make


# --- Catalog & Roster ---

@pytest.fixture
def catalog() -> dict[str, Service]:
    services = [
        Service(service_id=HAIRCUT_ID, service_name="Haircut", duration=30, price=Decimal("600")),
        Service(service_id=SHAVE_ID, service_name="Shave", duration=20, price=Decimal("650")),
        Service(service_id=FACIAL_ID, service_name="Facial", duration=45, price=Decimal("1200")),
        Service(service_id=BRIDAL_PACKAGE_ID, service_name="Bridal Package", duration=240,
                price=Decimal("10000"), is_packaged=True),
    ]
    return {s.service_id: s for s in services}


@pytest.fixture
def roster() -> list[AvailableStaff]:
    day = date(2025, 6, 21)
    return [
        AvailableStaff(
            staff_id=STAFF_X_ID,
            service_ids={HAIRCUT_ID, FACIAL_ID},
            availability=[AvailabilityWindow(start=datetime.combine(day, time(9, 0)),
                                             end=datetime.combine(day, time(12, 0)))],
        ),
        AvailableStaff(
            staff_id=STAFF_Y_ID,
            service_ids={HAIRCUT_ID},
            availability=[AvailabilityWindow(start=datetime.combine(day, time(9, 0)),
                                             end=datetime.combine(day, time(9, 45)))],
        ),
        AvailableStaff(
            staff_id=STAFF_Z_ID,
            service_ids={SHAVE_ID},
            availability=[AvailabilityWindow(start=datetime.combine(day, time(10, 0)),
                                             end=datetime.combine(day, time(18, 0)))],
        ),
    ]


# --- Service Fixtures ---

@pytest.fixture(scope="function")
def availability_service() -> AvailabilityService:
    return AvailabilityService()


@pytest.fixture(scope="function")
def appointment_form() -> AppointmentFormService:
    return AppointmentFormService()
