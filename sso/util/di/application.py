"""Application layer DI providers."""

from dishka import Scope, provide

from sso.application.usecase.sso import (
    AuthorizeUseCase,
    GetAccessTokenUseCase,
    GetSessionUseCase,
    GetUserInfoUseCase,
    LoginUseCase,
    LogoutUseCase,
)
from sso.config import SsoSettings
from sso.domain.service import (
    AccountLinkService,
    IdentityLinkService,
    JWTService,
    OAuthServer,
    ProfileService,
    RoleService,
    UserService,
)
from sso.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    # Login reconciliation
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        identity_link_service: IdentityLinkService,
        account_link_service: AccountLinkService,
        profile_service: ProfileService,
        user_service: UserService,
        sso_settings: SsoSettings,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_link_service=identity_link_service,
            account_link_service=account_link_service,
            profile_service=profile_service,
            user_service=user_service,
            sso_settings=sso_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_session_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetSessionUseCase:
        """Provide get session use case."""
        return GetSessionUseCase(jwt_service=jwt_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(self, sso_settings: SsoSettings) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(sso_settings=sso_settings)

    # Identity provider role
    @provide(scope=Scope.REQUEST)
    def get_authorize_use_case(self, oauth_server: OAuthServer) -> AuthorizeUseCase:
        """Provide authorize use case."""
        return AuthorizeUseCase(oauth_server=oauth_server)

    @provide(scope=Scope.REQUEST)
    def get_access_token_use_case(
        self, oauth_server: OAuthServer
    ) -> GetAccessTokenUseCase:
        """Provide get access token use case."""
        return GetAccessTokenUseCase(oauth_server=oauth_server)

    @provide(scope=Scope.REQUEST)
    def get_user_info_use_case(
        self,
        oauth_server: OAuthServer,
        user_service: UserService,
        role_service: RoleService,
    ) -> GetUserInfoUseCase:
        """Provide get user info use case."""
        return GetUserInfoUseCase(
            oauth_server=oauth_server,
            user_service=user_service,
            role_service=role_service,
        )
