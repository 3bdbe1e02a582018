"""Identity link entity.

Binds an external (provider, open id) pair to a local user account.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import ExternalIdentity, IdentityLinkId, UserId


class IdentityLink(DomainModel):
    """Persistent binding between an external identity and a local user.

    At most one link exists per (provider, open_id). A link is created
    disabled and unbound; binding sets ``user_id`` and enables it. The
    snapshot fields are refreshed from the provider on every login and
    are kept for audit and display only.
    """

    id: IdentityLinkId
    provider: str
    open_id: str  # Subject id, or the external username when the provider has none
    user_id: Optional[UserId] = None
    enable: bool = False

    # Snapshot of the last external identity seen for this link
    username: Optional[str] = None
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    claims: dict[str, str] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def fill(self, identity: ExternalIdentity) -> None:
        """Refresh the snapshot from the identity seen in this login."""
        now = datetime.now(timezone.utc)
        self.username = identity.username
        self.nickname = identity.nickname
        self.avatar = identity.avatar
        self.access_token = identity.access_token
        self.refresh_token = identity.refresh_token
        self.expires_at = (
            now + timedelta(seconds=identity.expires_in)
            if identity.expires_in
            else None
        )
        self.claims = dict(identity.claims)
        self.updated_at = now
