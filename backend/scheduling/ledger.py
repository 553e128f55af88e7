import logging
from datetime import datetime

from pydantic import ValidationError

from backend.models.appointment import Appointment
from backend.scheduling.dates import parse_date
from backend.scheduling.errors import AppointmentNotFoundError, DuplicateSlotError
from backend.storage import AppointmentStorage

logger = logging.getLogger(__name__)


class AppointmentLedger:
    """In-memory appointment list, saved wholesale after every change.

    A failed save is logged and the in-memory change still stands, so memory
    and storage can diverge until the next successful save.
    """

    def __init__(self, storage: AppointmentStorage) -> None:
        self.storage = storage
        self._appointments: list[Appointment] = []

    def load(self) -> None:
        result = self.storage.load()
        if not result.ok:
            logger.info('Starting with an empty appointment ledger: %s', result.error)
            self._appointments = []
            return

        appointments: list[Appointment] = []
        for entry in result.value:
            try:
                appointments.append(Appointment.model_validate(entry))
            except ValidationError:
                logger.warning('Skipping malformed stored appointment: %r', entry)
        self._appointments = appointments

    @property
    def appointments(self) -> list[Appointment]:
        return list(self._appointments)

    @property
    def count(self) -> int:
        return len(self._appointments)

    def is_slot_taken(self, doctor_name: str, date: str, start_time: str) -> bool:
        return any(
            appointment.doctor_name == doctor_name
            and appointment.date == date
            and appointment.start_time == start_time
            for appointment in self._appointments
        )

    def book(self, appointment: Appointment) -> Appointment:
        if self.is_slot_taken(appointment.doctor_name, appointment.date, appointment.start_time):
            raise DuplicateSlotError(appointment.doctor_name, appointment.date, appointment.start_time)

        self._appointments.append(appointment)
        self._persist()
        return appointment

    def cancel(self, appointment_id: str) -> Appointment:
        for index, appointment in enumerate(self._appointments):
            if appointment.id == appointment_id:
                del self._appointments[index]
                self._persist()
                return appointment

        raise AppointmentNotFoundError(appointment_id)

    def clear(self) -> None:
        self._appointments = []
        result = self.storage.clear()
        if not result.ok:
            logger.error('Failed to clear stored appointments: %s', result.error)

    def get_appointments_by_doctor(self, doctor_name: str) -> list[Appointment]:
        return [appointment for appointment in self._appointments if appointment.doctor_name == doctor_name]

    def upcoming(self, now: datetime | None = None) -> list[Appointment]:
        # Dates are compared at local midnight against the full current time,
        # so an appointment dated today counts as past once the day has begun.
        now = now or datetime.now()
        return sorted(
            (appointment for appointment in self._appointments if parse_date(appointment.date) >= now),
            key=lambda appointment: parse_date(appointment.date),
        )

    def past(self, now: datetime | None = None) -> list[Appointment]:
        now = now or datetime.now()
        return sorted(
            (appointment for appointment in self._appointments if parse_date(appointment.date) < now),
            key=lambda appointment: parse_date(appointment.date),
            reverse=True,
        )

    def _persist(self) -> None:
        result = self.storage.save(self._appointments)
        if not result.ok:
            logger.error('Failed to save appointments: %s', result.error)
