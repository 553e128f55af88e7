from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from backend.context import BookingContext, get_booking_context
from backend.models.appointment import DaySchedule
from backend.models.doctor import Doctor
from backend.scheduling.errors import InvalidTimeFormat, UnknownDoctorError

router = APIRouter(tags=['doctors'])


class DoctorCatalogResponse(BaseModel):
    doctors: list[Doctor]
    error: str | None = None
    loading: bool = False


def build_catalog_response(context: BookingContext) -> DoctorCatalogResponse:
    return DoctorCatalogResponse(
        doctors=context.catalog.doctors,
        error=context.catalog.error,
        loading=context.catalog.loading,
    )


@router.get('', response_model=DoctorCatalogResponse)
def list_doctors(context: BookingContext = Depends(get_booking_context)):
    return build_catalog_response(context)


@router.post('/refresh', response_model=DoctorCatalogResponse)
async def refresh_doctors(context: BookingContext = Depends(get_booking_context)):
    await context.catalog.refresh()
    return build_catalog_response(context)


@router.get('/{doctor_name}', response_model=Doctor)
def get_doctor(doctor_name: str, context: BookingContext = Depends(get_booking_context)):
    doctor = context.catalog.get_doctor_by_name(doctor_name)
    if doctor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Doctor not found.',
        )
    return doctor


@router.get('/{doctor_name}/schedule', response_model=list[DaySchedule])
def get_doctor_schedule(
    doctor_name: str,
    start: date | None = Query(default=None),
    context: BookingContext = Depends(get_booking_context),
):
    try:
        return context.week_schedule(doctor_name, start)
    except UnknownDoctorError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Doctor not found.',
        ) from exc
    except InvalidTimeFormat as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f'Doctor schedule is unusable. {exc}',
        ) from exc
