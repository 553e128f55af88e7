import httpx
import pytest
from fastapi.testclient import TestClient

from backend.context import BookingContext, get_booking_context
from backend.main import app
from backend.services.doctor_catalog import DoctorCatalog


@pytest.fixture
def catalog_responses(raw_schedules: list[dict]) -> list[httpx.Response]:
    return [httpx.Response(200, json=raw_schedules)]


@pytest.fixture
def booking_context(store, doctors, catalog_responses) -> BookingContext:
    catalog = DoctorCatalog(
        url='https://catalog.test/available.json',
        transport=httpx.MockTransport(lambda request: catalog_responses.pop(0)),
    )
    catalog.doctors = doctors
    return BookingContext.create(store=store, catalog=catalog)


@pytest.fixture
def client(booking_context: BookingContext):
    app.dependency_overrides[get_booking_context] = lambda: booking_context
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
