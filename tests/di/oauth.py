"""Mock OAuth providers for testing."""

from dishka import Scope, provide

from sso.adapter.oauth import JWTOAuthServer, MockOAuthClient
from sso.config import OAuthClientRegistration, OAuthServerSettings
from sso.domain.service.auth_service import OAuthClient, OAuthServer
from sso.util.di.infrastructure.oauth import OAuthProvider

MOCK_PROVIDER = "mock"

# Downstream application registered with the OAuth server
MOCK_CLIENT_ID = "app"
MOCK_CLIENT_SECRET = "app-secret"
MOCK_REDIRECT_URI = "https://app.example.com/cb"
MOCK_REDIRECT_URI_WITH_QUERY = "https://app.example.com/cb?tenant=7"


class MockOAuthProvider(OAuthProvider):
    """Mock OAuth provider exposing a single ``mock`` upstream provider."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_oauth_clients(self) -> dict[str, OAuthClient]:
        """Provide mock OAuth client."""
        return {MOCK_PROVIDER: MockOAuthClient(name=MOCK_PROVIDER)}

    @provide(scope=Scope.APP)
    def get_oauth_server(self, oauth_server_settings: OAuthServerSettings) -> OAuthServer:
        """Provide JWT OAuth server with one registered downstream client."""
        clients = {
            MOCK_CLIENT_ID: OAuthClientRegistration(
                client_secret=MOCK_CLIENT_SECRET,
                redirect_uris=[MOCK_REDIRECT_URI, MOCK_REDIRECT_URI_WITH_QUERY],
            )
        }
        return JWTOAuthServer(oauth_server_settings.model_copy(update={"clients": clients}))
