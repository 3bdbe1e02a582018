"""Authentication domain service."""

import logfire

from sso.domain.error import NotFoundError
from sso.domain.value import ExternalIdentity, UserId

from .base import Service


class OAuthClient:
    """OAuth client interface for one upstream identity provider."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Verified identity reported by the provider
        """
        raise NotImplementedError


class OAuthServer:
    """Identity provider role: issues codes and tokens to downstream apps."""

    @property
    def expire(self) -> int:
        """Access token lifetime in seconds."""
        raise NotImplementedError

    def check_client(self, client_id: str, redirect_uri: str) -> None:
        """Verify ``redirect_uri`` is registered for ``client_id``.

        Raises:
            ClientError: If the client or redirect URI is not registered
        """
        raise NotImplementedError

    def issue_code(self, user_id: UserId, client_id: str, redirect_uri: str) -> str:
        """Issue a short-lived authorization code bound to one client."""
        raise NotImplementedError

    def get_token(
        self,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str | None = None,
    ) -> str:
        """Exchange an authorization code for an access token.

        Raises:
            TokenError: If the client credentials are wrong, or the code is
                invalid, expired, used, or issued to another client
        """
        raise NotImplementedError

    def get_user_id(self, token: str) -> UserId:
        """Resolve the user an access token was issued for.

        Raises:
            TokenError: If the token is invalid or expired
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider authentication operations."""

    def __init__(self, oauth_clients: dict[str, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider key to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    @property
    def providers(self) -> list[str]:
        return sorted(self.oauth_clients)

    def _client(self, provider: str) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            logfire.warn("Unsupported provider", provider=provider)
            raise NotFoundError("Provider", provider)
        return client

    async def initiate_login(self, provider: str, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: Provider key
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            NotFoundError: If provider not configured
        """
        with logfire.span("auth_service.initiate_login", provider=provider):
            return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: str, code: str, state: str
    ) -> ExternalIdentity:
        """Complete OAuth login flow for any provider.

        Args:
            provider: Provider key
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            External identity from the provider

        Raises:
            NotFoundError: If provider not configured
        """
        with logfire.span("auth_service.complete_login", provider=provider):
            identity = await self._client(provider).complete_authorization(code, state)
            logfire.info(
                "Provider login completed",
                provider=provider,
                open_id=identity.open_id,
                username=identity.username,
            )
            return identity
