"""Value object base."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value compared field by field.

    Provider assertions are values: a login never edits what the provider
    reported, it copies fields onto entities.
    """

    model_config = ConfigDict(frozen=True)
