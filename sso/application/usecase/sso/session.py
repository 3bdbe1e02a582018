"""Get session use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from sso.domain.model import SessionContext
from sso.domain.service import JWTService, UserService
from sso.domain.value import UserId


class GetSessionRequest(BaseModel):
    """Inbound request state needed to rebuild the session."""

    token: str | None = None  # Session cookie
    action: str | None = None  # sso_action carried through the OAuth state
    origin: str | None = None  # Caller network address


class GetSessionUseCase:
    """Use case rebuilding a ``SessionContext`` from the session cookie."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get session use case.

        Args:
            jwt_service: Session token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetSessionRequest) -> SessionContext:
        """Build the session for this request.

        An invalid cookie or a cookie for a deleted or disabled user yields
        an anonymous session instead of an error.

        Args:
            request: Cookie, action and origin

        Returns:
            Session context
        """
        session = SessionContext(action=request.action, origin=request.origin)

        user_id = self.jwt_service.get_user_id_from_token(request.token)
        if not user_id:
            return session

        try:
            user = await self.user_service.find_by_id(UserId(UUID(user_id)))
        except ValueError:
            logfire.warn("Session token carries malformed user id", user_id=user_id)
            return session

        if user and user.enable:
            session.current_user = user

        return session
