"""Domain layer DI providers."""

from dishka import Scope, provide

from sso.config import SessionSettings, SsoSettings
from sso.domain.repository import (
    IdentityLinkRepository,
    RoleRepository,
    UserRepository,
)
from sso.domain.service import (
    AccountLinkService,
    AuthService,
    AvatarClient,
    AvatarService,
    IdentityLinkService,
    JWTService,
    OAuthClient,
    ProfileService,
    RoleService,
    UserService,
)
from sso.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, oauth_clients: dict[str, OAuthClient]) -> AuthService:
        """Provide multi-provider authentication domain service."""
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_jwt_service(self, session_settings: SessionSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(session_settings=session_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_role_service(self, role_repository: RoleRepository) -> RoleService:
        """Provide role domain service."""
        return RoleService(role_repository=role_repository)

    @provide
    def get_identity_link_service(
        self, identity_link_repository: IdentityLinkRepository
    ) -> IdentityLinkService:
        """Provide identity link domain service."""
        return IdentityLinkService(identity_link_repository=identity_link_repository)

    @provide
    def get_avatar_service(
        self, avatar_client: AvatarClient, sso_settings: SsoSettings
    ) -> AvatarService:
        """Provide avatar cache domain service."""
        return AvatarService(
            avatar_client=avatar_client, avatar_path=sso_settings.avatar_path
        )

    @provide
    def get_profile_service(
        self,
        role_service: RoleService,
        avatar_service: AvatarService,
        sso_settings: SsoSettings,
    ) -> ProfileService:
        """Provide profile merge domain service."""
        return ProfileService(
            role_service=role_service,
            avatar_service=avatar_service,
            sso_settings=sso_settings,
        )

    @provide
    def get_account_link_service(
        self,
        user_service: UserService,
        role_service: RoleService,
        sso_settings: SsoSettings,
    ) -> AccountLinkService:
        """Provide bind decision domain service."""
        return AccountLinkService(
            user_service=user_service,
            role_service=role_service,
            sso_settings=sso_settings,
        )
