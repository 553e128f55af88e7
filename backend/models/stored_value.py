"""Key-value storage model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from backend.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredValue(Base):
    """Represents one serialized blob in the durable store."""
    __tablename__ = "stored_values"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
