"""Base Pydantic models shared by DemoPilot entities."""

from datetime import datetime, timezone

from pydantic import BaseModel as PydanticBaseModel, ConfigDict
from ulid import ULID


def generate_ulid() -> str:
    """Generate a new ULID string."""
    return str(ULID())


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


class BaseModel(PydanticBaseModel):
    """Base model for mutable entities.

    Assignments are validated so field sanitisers run on every update,
    not only at construction time.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
    )


class ValueModel(PydanticBaseModel):
    """Base model for immutable value objects."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
        validate_default=True,
    )
