"""Time parsing, slot generation and booking reconciliation.

Times are 12-hour strings such as ``"9:00 AM"``. Hours are not range checked:
``"13:00PM"`` parses to hour 25 and formats back as ``"13:00 PM"``, and a
window whose end is not after its start yields no slots.
"""

import re
from typing import NamedTuple

from backend.models.appointment import Appointment, TimeSlot
from backend.scheduling.errors import InvalidTimeFormat

SLOT_DURATION_MINUTES = 30

_WHITESPACE = re.compile(r'\s+')
_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})(AM|PM)$', re.IGNORECASE)


class ParsedTime(NamedTuple):
    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


def parse_time(time_text: str) -> ParsedTime:
    cleaned = _WHITESPACE.sub('', time_text)
    match = _TIME_PATTERN.match(cleaned)

    if match is None:
        raise InvalidTimeFormat(time_text)

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3).upper()

    if period == 'PM' and hours != 12:
        hours += 12
    elif period == 'AM' and hours == 12:
        hours = 0

    return ParsedTime(hours, minutes)


def format_time(hours: int, minutes: int) -> str:
    period = 'PM' if hours >= 12 else 'AM'
    if hours == 0:
        display_hours = 12
    elif hours > 12:
        display_hours = hours - 12
    else:
        display_hours = hours
    return f'{display_hours}:{minutes:02d} {period}'


def generate_time_slots(start_text: str, end_text: str) -> list[TimeSlot]:
    start_total = parse_time(start_text).total_minutes
    end_total = parse_time(end_text).total_minutes

    slots: list[TimeSlot] = []
    current = start_total

    while current < end_total:
        slot_end = current + SLOT_DURATION_MINUTES
        slots.append(
            TimeSlot(
                start_time=format_time(*divmod(current, 60)),
                end_time=format_time(*divmod(slot_end, 60)),
                is_available=True,
                is_booked=False,
            )
        )
        current = slot_end

    return slots


def is_slot_booked(
    slot: TimeSlot,
    date: str,
    doctor_name: str,
    appointments: list[Appointment],
) -> bool:
    return any(
        appointment.doctor_name == doctor_name
        and appointment.date == date
        and appointment.start_time == slot.start_time
        and appointment.end_time == slot.end_time
        for appointment in appointments
    )


def mark_booked_slots(
    slots: list[TimeSlot],
    date: str,
    doctor_name: str,
    appointments: list[Appointment],
) -> list[TimeSlot]:
    marked: list[TimeSlot] = []
    for slot in slots:
        booked = is_slot_booked(slot, date, doctor_name, appointments)
        marked.append(slot.model_copy(update={'is_booked': booked, 'is_available': not booked}))
    return marked
