"""Domain value objects for SSO account reconciliation."""

from sso.domain.value.identifiers import NO_ROLE, IdentityLinkId, RoleId, UserId
from sso.domain.value.types import ExternalIdentity, Sex, is_remote_url

__all__ = [
    # Identifiers
    "UserId",
    "IdentityLinkId",
    "RoleId",
    "NO_ROLE",
    # Types
    "ExternalIdentity",
    "Sex",
    "is_remote_url",
]
