"""Errors raised by the scheduling, booking and catalog layers."""


class InvalidTimeFormat(ValueError):
    """Raised when a time-of-day string is not in 12-hour ``H:MM AM`` form."""

    def __init__(self, text: str) -> None:
        super().__init__(f'Invalid time format: {text}')
        self.text = text


class DuplicateSlotError(Exception):
    """Raised when booking a doctor/date/start time that is already taken."""

    def __init__(self, doctor_name: str, date: str, start_time: str) -> None:
        super().__init__('This time slot is already booked')
        self.doctor_name = doctor_name
        self.date = date
        self.start_time = start_time


class AppointmentNotFoundError(LookupError):
    def __init__(self, appointment_id: str) -> None:
        super().__init__('Appointment not found')
        self.appointment_id = appointment_id


class DoctorFetchError(Exception):
    """Raised when the doctor catalog cannot be fetched or decoded."""


class StorageReadError(Exception):
    pass


class StorageWriteError(Exception):
    pass


class UnknownDoctorError(LookupError):
    def __init__(self, name: str) -> None:
        super().__init__('Doctor not found')
        self.name = name
