from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from backend.context import BookingContext, get_booking_context
from backend.models.appointment import Appointment
from backend.scheduling.errors import (
    AppointmentNotFoundError,
    DuplicateSlotError,
    InvalidTimeFormat,
    UnknownDoctorError,
)

router = APIRouter(tags=['appointments'])


class CreateAppointmentRequest(BaseModel):
    doctor_name: str
    date: str
    start_time: str
    end_time: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator('doctor_name')
    @classmethod
    def validate_doctor_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Doctor name is required.')
        return value

    @field_validator('date')
    @classmethod
    def validate_date(cls, value: str) -> str:
        try:
            datetime.strptime(value, '%Y-%m-%d')
        except ValueError as exc:
            raise ValueError('Date must be formatted as YYYY-MM-DD.') from exc
        return value


class AppointmentSummaryResponse(BaseModel):
    total: int
    upcoming: list[Appointment]
    past: list[Appointment]


@router.get('', response_model=list[Appointment])
def list_appointments(
    doctor_name: str | None = Query(default=None),
    context: BookingContext = Depends(get_booking_context),
):
    if doctor_name is not None:
        return context.ledger.get_appointments_by_doctor(doctor_name)
    return context.ledger.appointments


@router.get('/upcoming', response_model=list[Appointment])
def list_upcoming_appointments(context: BookingContext = Depends(get_booking_context)):
    return context.ledger.upcoming()


@router.get('/past', response_model=list[Appointment])
def list_past_appointments(context: BookingContext = Depends(get_booking_context)):
    return context.ledger.past()


@router.get('/summary', response_model=AppointmentSummaryResponse)
def summarize_appointments(context: BookingContext = Depends(get_booking_context)):
    now = datetime.now()
    return AppointmentSummaryResponse(
        total=context.ledger.count,
        upcoming=context.ledger.upcoming(now),
        past=context.ledger.past(now),
    )


@router.post('', response_model=Appointment, status_code=status.HTTP_201_CREATED)
def book_appointment(data: CreateAppointmentRequest, context: BookingContext = Depends(get_booking_context)):
    try:
        return context.create_appointment(
            doctor_name=data.doctor_name,
            date_text=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
        )
    except UnknownDoctorError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Doctor not found.',
        ) from exc
    except InvalidTimeFormat as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except DuplicateSlotError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc


@router.delete('/{appointment_id}', status_code=status.HTTP_204_NO_CONTENT)
def cancel_appointment(appointment_id: str, context: BookingContext = Depends(get_booking_context)):
    try:
        context.ledger.cancel(appointment_id)
    except AppointmentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete('', status_code=status.HTTP_204_NO_CONTENT)
def clear_appointments(context: BookingContext = Depends(get_booking_context)):
    context.ledger.clear()
