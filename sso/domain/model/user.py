"""Local user accounts.

Two variants exist. ``BasicUser`` carries only what every account
provider offers (id, name, display name, enable flag). ``ExtendedUser``
adds profile fields and login counters. Callers never test for the
concrete class; they check the capability protocols below instead.
"""

from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import NO_ROLE, RoleId, Sex, UserId

NAME_MAX_LENGTH = 255


class BasicUser(DomainModel):
    """Local account with the base capability set only."""

    id: UserId
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)  # Unique login name
    display_name: Optional[str] = None
    enable: bool = True
    password_hash: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ExtendedUser(BasicUser):
    """Local account with profile fields and login counters."""

    mail: Optional[str] = None
    mobile: Optional[str] = None
    code: Optional[str] = None
    sex: Sex = Sex.UNKNOWN
    role_id: RoleId = NO_ROLE
    avatar: Optional[str] = None  # Remote URL or local reference
    logins: int = Field(default=0, ge=0)
    last_login: Optional[datetime] = None
    last_login_ip: Optional[str] = None


@runtime_checkable
class LoginAudit(Protocol):
    """Capability: the account records login counters."""

    logins: int
    last_login: Optional[datetime]
    last_login_ip: Optional[str]


@runtime_checkable
class ExtendedProfile(Protocol):
    """Capability: the account carries mergeable profile fields."""

    mail: Optional[str]
    mobile: Optional[str]
    code: Optional[str]
    sex: Sex
    role_id: RoleId
    avatar: Optional[str]
