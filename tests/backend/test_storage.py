import json

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from backend import storage as storage_module
from backend.models.appointment import Appointment
from backend.scheduling.errors import StorageReadError, StorageWriteError
from backend.storage import AppointmentStorage, KeyValueStore, create_store_tables


def test_key_value_store_set_get_delete(store: KeyValueStore) -> None:
    assert store.get('appointments') is None

    store.set('appointments', '[]')
    store.set('appointments', '[1]')

    assert store.get('appointments') == '[1]'

    store.delete('appointments')
    store.delete('appointments')

    assert store.get('appointments') is None


def test_save_then_load_uses_camel_case_json(storage: AppointmentStorage, store: KeyValueStore,
                                             mock_appointment: Appointment) -> None:
    result = storage.save([mock_appointment])

    assert result.ok
    assert json.loads(store.get('appointments')) == [
        {
            'id': '1',
            'doctorName': 'Dr. Smith',
            'doctorTimezone': 'America/New_York',
            'date': '2025-11-17',
            'dayOfWeek': 'Monday',
            'startTime': '9:00 AM',
            'endTime': '9:30 AM',
            'bookedAt': '2025-11-14T10:00:00.000Z',
        }
    ]
    assert storage.load().value == json.loads(store.get('appointments'))


def test_save_overwrites_previous_snapshot(storage: AppointmentStorage, mock_appointment: Appointment) -> None:
    storage.save([mock_appointment, mock_appointment.model_copy(update={'id': '2'})])
    storage.save([])

    assert storage.load().value == []


def test_load_handles_unicode_names(storage: AppointmentStorage, mock_appointment: Appointment) -> None:
    storage.save([mock_appointment.model_copy(update={'doctor_name': 'Dr. José García'})])

    assert storage.load().value[0]['doctorName'] == 'Dr. José García'


@pytest.mark.parametrize('payload', [None, '', 'corrupted data', '{"a": 1}', '123', 'null'])
def test_load_reports_unreadable_payload(storage: AppointmentStorage, store: KeyValueStore,
                                         payload: str | None) -> None:
    if payload is not None:
        store.set('appointments', payload)

    result = storage.load()

    assert not result.ok
    assert isinstance(result.error, StorageReadError)
    assert result.value is None


def test_load_reports_database_failure(storage: AppointmentStorage, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_get(key: str) -> str:
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    monkeypatch.setattr(storage.store, 'get', failing_get)

    result = storage.load()

    assert isinstance(result.error, StorageReadError)


def test_save_reports_database_failure(storage: AppointmentStorage, mock_appointment: Appointment,
                                       monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_set(key: str, value: str) -> None:
        raise OperationalError('INSERT', {}, Exception('disk I/O error'))

    monkeypatch.setattr(storage.store, 'set', failing_set)

    result = storage.save([mock_appointment])

    assert not result.ok
    assert isinstance(result.error, StorageWriteError)


def test_clear_removes_snapshot(storage: AppointmentStorage, mock_appointment: Appointment) -> None:
    storage.save([mock_appointment])

    assert storage.clear().ok
    assert storage.clear().ok
    assert not storage.load().ok


def test_create_store_tables_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    engine = create_engine('sqlite://', poolclass=StaticPool)
    monkeypatch.setattr(storage_module, 'engine', engine)

    create_store_tables()
    create_store_tables()

    columns = {column['name'] for column in inspect(engine).get_columns('stored_values')}
    assert columns == {'key', 'value', 'updated_at'}
    engine.dispose()
