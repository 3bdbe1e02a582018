"""Repository interfaces for the SSO domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from sso.domain.repository.identity_link import IdentityLinkRepository
from sso.domain.repository.role import RoleRepository
from sso.domain.repository.user import UserRepository

__all__ = [
    "IdentityLinkRepository",
    "RoleRepository",
    "UserRepository",
]
