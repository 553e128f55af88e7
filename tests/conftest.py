import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('FETCH_DOCTORS_ON_STARTUP', 'false')

from backend.database import Base  # noqa: E402
from backend.models.appointment import Appointment  # noqa: E402
from backend.models.doctor import DoctorScheduleRaw  # noqa: E402
from backend.models.stored_value import StoredValue  # noqa: E402
from backend.scheduling.ledger import AppointmentLedger  # noqa: E402
from backend.services.doctor_catalog import group_schedules_by_doctor  # noqa: E402
from backend.storage import AppointmentStorage, KeyValueStore  # noqa: E402

RAW_SCHEDULES = [
    {
        'name': 'Dr. Smith',
        'timezone': 'America/New_York',
        'day_of_week': 'Monday',
        'available_at': '9:00 AM',
        'available_until': '5:00 PM',
    },
    {
        'name': 'Dr. Smith',
        'timezone': 'America/New_York',
        'day_of_week': 'Tuesday',
        'available_at': '9:00 AM',
        'available_until': '5:00 PM',
    },
    {
        'name': 'Dr. Johnson',
        'timezone': 'America/Los_Angeles',
        'day_of_week': 'Monday',
        'available_at': '10:00 AM',
        'available_until': '6:00 PM',
    },
]


@pytest.fixture
def raw_schedules() -> list[dict]:
    return [dict(record) for record in RAW_SCHEDULES]


@pytest.fixture
def doctors(raw_schedules):
    return group_schedules_by_doctor([DoctorScheduleRaw(**record) for record in raw_schedules])


@pytest.fixture
def mock_appointment() -> Appointment:
    return Appointment(
        id='1',
        doctor_name='Dr. Smith',
        doctor_timezone='America/New_York',
        date='2025-11-17',
        day_of_week='Monday',
        start_time='9:00 AM',
        end_time='9:30 AM',
        booked_at='2025-11-14T10:00:00.000Z',
    )


@pytest.fixture
def store_session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[StoredValue.__table__])
    try:
        yield testing_session_local
    finally:
        Base.metadata.drop_all(bind=engine, tables=[StoredValue.__table__])
        engine.dispose()


@pytest.fixture
def store(store_session_factory) -> KeyValueStore:
    return KeyValueStore(store_session_factory)


@pytest.fixture
def storage(store) -> AppointmentStorage:
    return AppointmentStorage(store, key='appointments')


@pytest.fixture
def ledger(storage) -> AppointmentLedger:
    appointment_ledger = AppointmentLedger(storage)
    appointment_ledger.load()
    return appointment_ledger
