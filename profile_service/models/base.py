"""
Base model configuration and common model utilities.
"""

from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declared_attr
from sqlalchemy.types import TypeDecorator

from profile_service.core.database import Base

UTC = ZoneInfo("UTC")


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp column.

    SQLite and MySQL ``DATETIME`` columns drop the offset, so values are
    stored as naive UTC and tagged as UTC again when loaded.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class BaseModel(Base):
    """Base model class with timestamps maintained on every write."""

    __abstract__ = True

    @declared_attr
    def __tablename__(cls) -> str:
        """Generate the plural table name from the class name."""
        return f"{cls.__name__.lower()}s"

    created_at = Column(
        UTCDateTime(),
        default=lambda: datetime.now(UTC),
        nullable=False
    )
    updated_at = Column(
        UTCDateTime(),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False
    )

    def dict(self) -> dict[str, Any]:
        """Convert model instance to dictionary."""
        return {
            column.name: getattr(self, column.name)
            for column in self.__table__.columns
        }
