"""PostgreSQL repository implementations."""

from sso.persistence.repository.identity_link import PostgresIdentityLinkRepository
from sso.persistence.repository.role import PostgresRoleRepository
from sso.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresIdentityLinkRepository",
    "PostgresRoleRepository",
    "PostgresUserRepository",
]
