'''
Static enums shared by the availability and booking models.
'''
import enum


class SegmentType(str, enum.Enum):
    WORKING = "WORKING"
    BREAK = "BREAK"
    TIME_OFF = "TIME_OFF"


class DayOfWeek(int, enum.Enum):
    """
    Day numbering used by the employee records: 0=Sunday ... 6=Saturday.
    Note this differs from Python's date.weekday() (0=Monday).
    """
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day) -> 'DayOfWeek':
        # date.isoweekday(): 1=Monday ... 7=Sunday
        return cls(day.isoweekday() % 7)


class SerializerState(str, enum.Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
