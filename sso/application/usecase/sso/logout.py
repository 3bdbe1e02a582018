"""Logout use case."""

import logfire
from pydantic import BaseModel

from sso.config import SsoSettings
from sso.domain.model import SessionContext


class LogoutResponse(BaseModel):
    """Logout response."""

    redirect_url: str


class LogoutUseCase:
    """Use case for signing the current user out."""

    def __init__(self, sso_settings: SsoSettings) -> None:
        self.sso_settings = sso_settings

    async def execute(self, session: SessionContext) -> LogoutResponse:
        """Clear the session's current user.

        Identity links are left untouched; the next SSO login reuses them.
        """
        user = session.current_user
        session.current_user = None

        logfire.info(
            "User logged out", user_id=str(user.id) if user else None
        )
        return LogoutResponse(redirect_url=self.sso_settings.login_url)
