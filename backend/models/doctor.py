"""Doctor and weekly schedule model definitions."""

from enum import Enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DayOfWeek(str, Enum):
    """Weekday names in the order used by the catalog and calendar."""
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


class DoctorScheduleRaw(BaseModel):
    """One availability record as served by the remote catalog."""
    name: str
    timezone: str
    day_of_week: DayOfWeek
    available_at: str
    available_until: str


class DoctorSchedule(BaseModel):
    """A doctor's availability window on one weekday."""
    day_of_week: DayOfWeek
    available_at: str
    available_until: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Doctor(BaseModel):
    """A doctor with all of their availability windows, in catalog order."""
    name: str
    timezone: str
    schedules: list[DoctorSchedule] = []

    class Config:
        alias_generator = to_camel
        populate_by_name = True
