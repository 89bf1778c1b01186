'''
testing services/availability_service.py
'''
from datetime import date, datetime, time, timezone
from uuid import uuid4

from tests.constants import TEST_DATE, TEST_EMPLOYEE_ID, TEST_OTHER_EMPLOYEE_ID
from salobook_scheduler.models.availability import DailyTimeline, NoSchedule
from salobook_scheduler.models.enums import SegmentType
from salobook_scheduler.services.availability_service import AvailabilityService


def _local(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(TEST_DATE, time(hour, minute))


class TestAvailabilityService:

    ### Tests for record selection ###

    def test_select_schedule_by_weekday(self, availability_service: AvailabilityService, make_schedule):
        wednesday = make_schedule(schedule_id=uuid4())
        monday = make_schedule(day_of_week=1, schedule_id=uuid4())
        assert availability_service.select_schedule([monday, wednesday], TEST_DATE) == wednesday

    def test_select_schedule_respects_validity(self, availability_service: AvailabilityService, make_schedule):
        expired = make_schedule(valid_until=date(2025, 6, 30), schedule_id=uuid4())
        future = make_schedule(valid_from=date(2025, 8, 1), schedule_id=uuid4())
        assert availability_service.select_schedule([expired, future], TEST_DATE) is None

    def test_select_schedule_prefers_latest_valid_from(self, availability_service: AvailabilityService, make_schedule):
        old = make_schedule(valid_from=date(2024, 1, 1), schedule_id=uuid4())
        new = make_schedule(start=time(10, 0), valid_from=date(2025, 6, 1), schedule_id=uuid4())
        assert availability_service.select_schedule([old, new], TEST_DATE) == new

    def test_valid_until_is_inclusive(self, availability_service: AvailabilityService, make_schedule):
        last_day = make_schedule(valid_until=TEST_DATE)
        assert availability_service.select_schedule([last_day], TEST_DATE) == last_day

    def test_breaks_for_day(self, availability_service: AvailabilityService, make_break):
        lunch = make_break(time(12, 0), time(13, 0))
        monday_lunch = make_break(time(12, 0), time(13, 0), day_of_week=1)
        assert availability_service.breaks_for_day([lunch, monday_lunch], TEST_DATE) == [lunch]

    def test_blocks_for_date(self, availability_service: AvailabilityService, make_block):
        today = make_block(_local(10), _local(11))
        yesterday = make_block(datetime(2025, 7, 1, 10), datetime(2025, 7, 1, 11))
        # 20:00Z on the 1st is 01:30 local on the 2nd
        late_utc = make_block(
            datetime(2025, 7, 1, 20, 0, tzinfo=timezone.utc),
            datetime(2025, 7, 1, 22, 0, tzinfo=timezone.utc),
        )
        ending_at_midnight = make_block(datetime(2025, 7, 1, 10), datetime(2025, 7, 2, 0, 0))
        assert availability_service.blocks_for_date(
            [today, yesterday, late_utc, ending_at_midnight], TEST_DATE
        ) == [today, late_utc]

    ### Tests for get_daily_availability ###

    def test_daily_availability(
        self,
        availability_service: AvailabilityService,
        make_schedule,
        make_break,
        make_block
    ):
        result = availability_service.get_daily_availability(
            employee_id=TEST_EMPLOYEE_ID,
            target_date=TEST_DATE,
            schedules=[make_schedule()],
            breaks=[make_break(time(12, 0), time(13, 0))],
            onetime_blocks=[make_block(_local(9), _local(10), reason="Doctor")],
        )
        assert isinstance(result.timeline, DailyTimeline)
        assert [s.type for s in result.timeline.segments] == [
            SegmentType.TIME_OFF, SegmentType.WORKING, SegmentType.BREAK, SegmentType.WORKING
        ]
        assert result.fully_covered is False
        assert [(o.reason, o.start_time, o.end_time) for o in result.overlapping_time_off] == [
            ("Doctor", time(9, 0), time(10, 0))
        ]

    def test_day_off(self, availability_service: AvailabilityService, make_schedule, make_block):
        result = availability_service.get_daily_availability(
            employee_id=TEST_EMPLOYEE_ID,
            target_date=TEST_DATE,
            schedules=[make_schedule(day_of_week=1)],
            breaks=[],
            onetime_blocks=[make_block(_local(8), _local(18))],
        )
        assert isinstance(result.timeline, NoSchedule)
        assert result.fully_covered is False
        assert result.overlapping_time_off == []

    def test_full_day_vacation(self, availability_service: AvailabilityService, make_schedule, make_block):
        result = availability_service.get_daily_availability(
            employee_id=TEST_EMPLOYEE_ID,
            target_date=TEST_DATE,
            schedules=[make_schedule()],
            breaks=[],
            onetime_blocks=[make_block(datetime(2025, 6, 30), datetime(2025, 7, 4))],
        )
        assert result.fully_covered is True
        assert result.timeline.time_off_minutes == 480

    def test_other_employees_records_are_ignored(
        self,
        availability_service: AvailabilityService,
        make_schedule,
        make_break
    ):
        result = availability_service.get_daily_availability(
            employee_id=TEST_EMPLOYEE_ID,
            target_date=TEST_DATE,
            schedules=[make_schedule()],
            breaks=[make_break(time(12, 0), time(13, 0), employee_id=TEST_OTHER_EMPLOYEE_ID)],
            onetime_blocks=[],
        )
        assert result.timeline.break_minutes == 0
