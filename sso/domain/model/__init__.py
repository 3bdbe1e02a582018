"""Domain model entities for SSO account reconciliation."""

from sso.domain.model.identity_link import IdentityLink
from sso.domain.model.role import Role
from sso.domain.model.session import SessionContext
from sso.domain.model.user import BasicUser, ExtendedProfile, ExtendedUser, LoginAudit

__all__ = [
    "BasicUser",
    "ExtendedUser",
    "ExtendedProfile",
    "LoginAudit",
    "IdentityLink",
    "Role",
    "SessionContext",
]
