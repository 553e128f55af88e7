"""Durable key-value storage and the appointment snapshot kept in it.

The appointment list is always written and read as one JSON array under a
single key. ``AppointmentStorage`` never raises: every call returns a
``StorageResult`` and the caller decides how to treat a failure.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core import config
from backend.database import SessionLocal, engine
from backend.models.appointment import Appointment
from backend.models.stored_value import StoredValue
from backend.scheduling.errors import StorageReadError, StorageWriteError


class KeyValueStore:
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        db = self._session_factory()
        try:
            stored = db.query(StoredValue).filter(StoredValue.key == key).first()
            return stored.value if stored else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self._session_factory()
        try:
            stored = db.query(StoredValue).filter(StoredValue.key == key).first()
            if stored is None:
                db.add(StoredValue(key=key, value=value))
            else:
                stored.value = value
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self._session_factory()
        try:
            db.query(StoredValue).filter(StoredValue.key == key).delete()
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()


def create_store_tables() -> None:
    StoredValue.__table__.create(bind=engine, checkfirst=True)


@dataclass(frozen=True)
class StorageResult:
    value: Any = None
    error: Exception | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


class AppointmentStorage:
    def __init__(self, store: KeyValueStore, key: str = config.APPOINTMENTS_STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> StorageResult:
        """Read the stored snapshot as a list of raw appointment dicts."""
        try:
            payload = self.store.get(self.key)
        except SQLAlchemyError as exc:
            return StorageResult(error=StorageReadError(f'Failed to read {self.key!r}: {exc}'))

        if not payload:
            return StorageResult(error=StorageReadError(f'No data stored under {self.key!r}'))

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            return StorageResult(error=StorageReadError(f'Stored {self.key!r} is not valid JSON: {exc}'))

        if not isinstance(data, list):
            return StorageResult(error=StorageReadError(f'Stored {self.key!r} is not a list'))

        return StorageResult(value=data)

    def save(self, appointments: list[Appointment]) -> StorageResult:
        try:
            payload = json.dumps(
                [appointment.model_dump(mode='json', by_alias=True) for appointment in appointments]
            )
            self.store.set(self.key, payload)
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            return StorageResult(error=StorageWriteError(f'Failed to save {self.key!r}: {exc}'))
        return StorageResult(value=len(appointments))

    def clear(self) -> StorageResult:
        try:
            self.store.delete(self.key)
        except SQLAlchemyError as exc:
            return StorageResult(error=StorageWriteError(f'Failed to clear {self.key!r}: {exc}'))
        return StorageResult()
