"""Appointment and time slot model definitions."""

from datetime import datetime

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from backend.models.doctor import DayOfWeek


class TimeSlot(BaseModel):
    """A bookable 30-minute slot. Regenerated on every projection."""
    start_time: str
    end_time: str
    is_available: bool = True
    is_booked: bool = False
    date: str | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DaySchedule(BaseModel):
    """The slots offered by a doctor on one calendar date."""
    date: str
    display_date: str
    day_of_week: DayOfWeek
    slots: list[TimeSlot] = []
    is_available: bool = False
    is_past: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Appointment(BaseModel):
    """Represents a booked appointment."""
    id: str
    doctor_name: str
    doctor_timezone: str
    date: str
    day_of_week: DayOfWeek
    start_time: str
    end_time: str
    booked_at: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator('date')
    @classmethod
    def validate_date(cls, value: str) -> str:
        try:
            datetime.strptime(value, '%Y-%m-%d')
        except ValueError as exc:
            raise ValueError('Date must be formatted as YYYY-MM-DD.') from exc
        return value
