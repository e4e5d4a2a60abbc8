"""Declarative base and shared column types."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Text
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from blog3.services.datetime_service import format_iso, parse_iso


class Base(DeclarativeBase):
    pass


class OffsetDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime stored as ISO 8601 text.

    SQLite's native DATETIME drops the offset; the text form keeps it, so a
    post's date is read back in the offset it was written in.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Any) -> str | None:
        if value is None:
            return None
        return format_iso(value)

    def process_result_value(self, value: str | None, dialect: Any) -> datetime | None:
        if value is None:
            return None
        return parse_iso(value)
