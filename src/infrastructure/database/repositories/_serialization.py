"""JSON (de)serialization helpers for nested document entries."""

from datetime import datetime
from typing import Any
from uuid import UUID


def dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def load_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def dump_uuid(value: UUID) -> str:
    return str(value)


def load_uuid(value: Any) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))
