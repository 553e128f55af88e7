from datetime import date

from backend.models.appointment import Appointment, DaySchedule, TimeSlot
from backend.models.doctor import DayOfWeek, Doctor, DoctorSchedule
from backend.scheduling.dates import (
    format_date,
    format_display_date,
    get_day_of_week,
    get_next_week_dates,
    is_past_date,
)
from backend.scheduling.time_slots import generate_time_slots, mark_booked_slots


def find_schedule_for_day(doctor: Doctor, day_of_week: DayOfWeek) -> DoctorSchedule | None:
    # Only the first window of a weekday is projected; later ones are ignored.
    return next(
        (schedule for schedule in doctor.schedules if schedule.day_of_week == day_of_week),
        None,
    )


def get_slots_for_date(doctor: Doctor, day: date, appointments: list[Appointment]) -> list[TimeSlot]:
    schedule = find_schedule_for_day(doctor, get_day_of_week(day))
    if schedule is None:
        return []

    date_text = format_date(day)
    slots = generate_time_slots(schedule.available_at, schedule.available_until)
    return [
        slot.model_copy(update={'date': date_text})
        for slot in mark_booked_slots(slots, date_text, doctor.name, appointments)
    ]


def project_week(
    doctor: Doctor,
    appointments: list[Appointment],
    reference_date: date | None = None,
) -> list[DaySchedule]:
    week: list[DaySchedule] = []
    for day in get_next_week_dates(reference_date):
        slots = get_slots_for_date(doctor, day, appointments)
        week.append(
            DaySchedule(
                date=format_date(day),
                display_date=format_display_date(day),
                day_of_week=get_day_of_week(day),
                slots=slots,
                is_available=bool(slots),
                is_past=is_past_date(day),
            )
        )
    return week
