"""Strongly typed identifiers for SSO domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
IdentityLinkId = NewType("IdentityLinkId", UUID)

# Roles use integer ids; 0 means "no role assigned"
RoleId = NewType("RoleId", int)

NO_ROLE = RoleId(0)
