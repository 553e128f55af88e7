"""Remote doctor catalog: fetching, grouping and the cached catalog state."""

import logging

import httpx
from pydantic import TypeAdapter

from backend.core import config
from backend.models.doctor import Doctor, DoctorSchedule, DoctorScheduleRaw
from backend.scheduling.errors import DoctorFetchError

logger = logging.getLogger(__name__)

_raw_schedules_adapter = TypeAdapter(list[DoctorScheduleRaw])


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


async def fetch_doctor_schedules(client: httpx.AsyncClient, url: str) -> list[DoctorScheduleRaw]:
    """Fetch the raw availability records.

    Every failure is raised as ``DoctorFetchError`` with a message that can be
    shown to the user as is. The request is attempted once.
    """
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise DoctorFetchError(f'Error fetching doctors: {_describe(exc)}') from exc
    except Exception as exc:
        raise DoctorFetchError('Unknown error occurred while fetching doctors') from exc

    if not response.is_success:
        raise DoctorFetchError(f'Failed to fetch doctors: {response.status_code} {response.reason_phrase}')

    try:
        return _raw_schedules_adapter.validate_python(response.json())
    except ValueError as exc:
        raise DoctorFetchError(f'Error fetching doctors: {_describe(exc)}') from exc


def group_schedules_by_doctor(schedules: list[DoctorScheduleRaw]) -> list[Doctor]:
    doctors: dict[str, Doctor] = {}

    for schedule in schedules:
        doctor = doctors.get(schedule.name)
        if doctor is None:
            doctor = Doctor(name=schedule.name, timezone=schedule.timezone, schedules=[])
            doctors[schedule.name] = doctor

        doctor.schedules.append(
            DoctorSchedule(
                day_of_week=schedule.day_of_week,
                available_at=schedule.available_at.strip(),
                available_until=schedule.available_until.strip(),
            )
        )

    return list(doctors.values())


async def fetch_doctors(client: httpx.AsyncClient, url: str) -> list[Doctor]:
    return group_schedules_by_doctor(await fetch_doctor_schedules(client, url))


class DoctorCatalog:
    """The most recently fetched doctor list, or the error that replaced it."""

    def __init__(
        self,
        url: str = config.DOCTOR_CATALOG_URL,
        timeout: float = config.DOCTOR_CATALOG_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self.doctors: list[Doctor] = []
        self.error: str | None = None
        self.loading = False

    async def refresh(self) -> list[Doctor]:
        self.loading = True
        self.error = None
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                doctors = await fetch_doctors(client, self.url)
        except DoctorFetchError as exc:
            logger.error('Doctor catalog refresh failed: %s', exc)
            self.error = str(exc)
            self.doctors = []
        else:
            self.doctors = doctors
        finally:
            self.loading = False

        return self.doctors

    def get_doctor_by_name(self, name: str) -> Doctor | None:
        return next((doctor for doctor in self.doctors if doctor.name == name), None)
