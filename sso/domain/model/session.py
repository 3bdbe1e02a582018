"""Per-request session context."""

from dataclasses import dataclass
from typing import Optional

from sso.domain.model.user import BasicUser


@dataclass
class SessionContext:
    """Session state passed explicitly through a login.

    ``current_user`` is the signed-in local account, if any. Activating a
    session means assigning it; the interface layer turns it into a cookie.
    """

    current_user: Optional[BasicUser] = None
    action: Optional[str] = None  # "bind" forces a rebind to current_user
    origin: Optional[str] = None  # Caller network address

    @property
    def force_bind(self) -> bool:
        """Whether the caller explicitly asked to rebind the identity."""
        return (self.action or "").strip().lower() == "bind"
