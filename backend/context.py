import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone

from fastapi import Request

from backend.models.appointment import Appointment, DaySchedule
from backend.models.doctor import Doctor
from backend.scheduling.dates import format_date, get_day_of_week, parse_date
from backend.scheduling.errors import UnknownDoctorError
from backend.scheduling.ledger import AppointmentLedger
from backend.scheduling.projection import project_week
from backend.scheduling.time_slots import format_time, parse_time
from backend.services.doctor_catalog import DoctorCatalog
from backend.storage import AppointmentStorage, KeyValueStore


@dataclass
class BookingContext:
    """Everything the API needs to list doctors and manage bookings."""

    catalog: DoctorCatalog
    ledger: AppointmentLedger

    @classmethod
    def create(
        cls,
        store: KeyValueStore | None = None,
        catalog: DoctorCatalog | None = None,
    ) -> 'BookingContext':
        ledger = AppointmentLedger(AppointmentStorage(store or KeyValueStore()))
        ledger.load()
        return cls(catalog=catalog or DoctorCatalog(), ledger=ledger)

    def require_doctor(self, name: str) -> Doctor:
        doctor = self.catalog.get_doctor_by_name(name)
        if doctor is None:
            raise UnknownDoctorError(name)
        return doctor

    def week_schedule(self, doctor_name: str, reference_date: date | None = None) -> list[DaySchedule]:
        doctor = self.require_doctor(doctor_name)
        return project_week(doctor, self.ledger.get_appointments_by_doctor(doctor.name), reference_date)

    def create_appointment(self, doctor_name: str, date_text: str, start_time: str, end_time: str) -> Appointment:
        doctor = self.require_doctor(doctor_name)
        day = parse_date(date_text).date()
        # Stored in the same spelling the projection generates.
        start_time = format_time(*parse_time(start_time))
        end_time = format_time(*parse_time(end_time))

        appointment = Appointment(
            id=str(uuid.uuid4()),
            doctor_name=doctor.name,
            doctor_timezone=doctor.timezone,
            date=format_date(day),
            day_of_week=get_day_of_week(day),
            start_time=start_time,
            end_time=end_time,
            booked_at=datetime.now(timezone.utc).isoformat(),
        )
        return self.ledger.book(appointment)


def get_booking_context(request: Request) -> BookingContext:
    context = getattr(request.app.state, 'booking_context', None)
    if context is None:
        raise RuntimeError('Booking context has not been initialized.')
    return context
