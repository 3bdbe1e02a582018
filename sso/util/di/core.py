"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from sso.config import OAuthServerSettings, SessionSettings, Settings, SsoSettings
from sso.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_sso_settings(self, settings: Settings) -> SsoSettings:
        """Provide reconciliation policy."""
        return settings.sso

    @provide(scope=Scope.APP)
    def provide_session_settings(self, settings: Settings) -> SessionSettings:
        """Provide session cookie settings."""
        return settings.session

    @provide(scope=Scope.APP)
    def provide_oauth_server_settings(self, settings: Settings) -> OAuthServerSettings:
        """Provide OAuth server settings."""
        return settings.oauth_server
