"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are mutated in place during a login and then saved, so
    assignments are validated instead of forbidden.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,  # Allow custom value objects
    )
