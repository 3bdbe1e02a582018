"""Session token domain service."""

from datetime import timedelta

import logfire

from sso.config import SessionSettings
from sso.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Issues and verifies the signed session cookie token."""

    def __init__(self, session_settings: SessionSettings) -> None:
        """Initialize JWT service.

        Args:
            session_settings: Session cookie settings
        """
        self.session_settings = session_settings

    def create_token(self, user_id: str, name: str) -> str:
        """Create session token for a user.

        Args:
            user_id: User ID
            name: Login name

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id, name=name):
            token = create_token(
                {"user_id": user_id, "name": name},
                self.session_settings.jwt_secret,
                self.session_settings.jwt_algorithm,
                timedelta(days=self.session_settings.expiry_days),
            )
            logfire.info("Session token created", user_id=user_id, name=name)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify session token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(
                    token,
                    self.session_settings.jwt_secret,
                    self.session_settings.jwt_algorithm,
                )
                logfire.info("Session token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.error("Session token verification failed", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from a session token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except Exception as e:
            # Invalid or expired cookie, treat as signed out
            logfire.debug("Session token rejected, treating as anonymous", error=str(e))
            return None
