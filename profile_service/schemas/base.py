"""
Base Pydantic schemas and common schema utilities.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class BaseDBSchema(BaseSchema):
    """Base schema for database models with common fields."""

    id: int
    created_at: datetime
    updated_at: datetime


class BaseCreateSchema(BaseSchema):
    """Base schema for creating new records."""
    pass


class BaseUpdateSchema(BaseSchema):
    """Base schema for updating existing records. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")
