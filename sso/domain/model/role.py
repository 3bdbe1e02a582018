"""Role entity."""

from datetime import datetime, timezone

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import RoleId


class Role(DomainModel):
    """Named role. Names are unique."""

    id: RoleId
    name: str = Field(min_length=1, max_length=100)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
