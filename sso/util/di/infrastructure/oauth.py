"""OAuth infrastructure providers."""

from dishka import Scope, provide

from sso.adapter.oauth import GenericOAuthClient, JWTOAuthServer
from sso.config import OAuthServerSettings, Settings
from sso.domain.service.auth_service import OAuthClient, OAuthServer
from sso.util.di.base import ProviderBase
from sso.util.error import ConfigurationError


class OAuthProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthProvider(OAuthProvider):
    """Production OAuth provider: one generic client per configured provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth_clients(self, settings: Settings) -> dict[str, OAuthClient]:
        """Provide OAuth clients keyed by provider.

        Raises:
            ConfigurationError: If a provider lacks client credentials
        """
        clients: dict[str, OAuthClient] = {}
        for name, provider in settings.providers.items():
            if not provider.client_id or not provider.client_secret:
                raise ConfigurationError(
                    f"OAuth provider '{name}' needs client_id and client_secret"
                )
            clients[name] = GenericOAuthClient(
                name=name,
                settings=provider,
                redirect_uri=settings.callback_url(name),
            )
        return clients

    @provide(scope=Scope.APP)
    def get_oauth_server(self, oauth_server_settings: OAuthServerSettings) -> OAuthServer:
        """Provide OAuth server (APP scope: it remembers exchanged codes)."""
        return JWTOAuthServer(oauth_server_settings)
