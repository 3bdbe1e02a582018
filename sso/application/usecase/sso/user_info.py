"""Get user info use case (identity provider role)."""

import logfire
from pydantic import BaseModel

from sso.domain.model import ExtendedProfile
from sso.domain.service import OAuthServer, RoleService, UserService


class GetUserInfoRequest(BaseModel):
    """User info request."""

    access_token: str


class BasicUserInfo(BaseModel):
    """User info every account can provide."""

    userid: str
    username: str
    nickname: str | None


class ExtendedUserInfo(BasicUserInfo):
    """User info for accounts with an extended profile."""

    sex: int
    mail: str | None
    mobile: str | None
    code: str | None
    roleid: int
    rolename: str | None
    avatar: str | None


class GetUserInfoUseCase:
    """Use case describing the user an access token was issued for."""

    def __init__(
        self,
        oauth_server: OAuthServer,
        user_service: UserService,
        role_service: RoleService,
    ) -> None:
        """Initialize get user info use case.

        Args:
            oauth_server: OAuth server validating the token
            user_service: User domain service
            role_service: Role domain service, for role names
        """
        self.oauth_server = oauth_server
        self.user_service = user_service
        self.role_service = role_service

    async def execute(
        self, request: GetUserInfoRequest
    ) -> BasicUserInfo | ExtendedUserInfo:
        """Execute get user info flow.

        Args:
            request: Request with access token

        Returns:
            Basic info, extended with profile fields when the account has them

        Raises:
            TokenError: If the token is invalid or expired
            NotFoundError: If the user no longer exists
        """
        user_id = self.oauth_server.get_user_id(request.access_token)

        with logfire.span("get_user_info", user_id=str(user_id)):
            user = await self.user_service.get_by_id(user_id)

            if not isinstance(user, ExtendedProfile):
                return BasicUserInfo(
                    userid=str(user.id),
                    username=user.name,
                    nickname=user.display_name,
                )

            return ExtendedUserInfo(
                userid=str(user.id),
                username=user.name,
                nickname=user.display_name,
                sex=int(user.sex),
                mail=user.mail,
                mobile=user.mobile,
                code=user.code,
                roleid=user.role_id,
                rolename=await self.role_service.get_role_name(user.role_id),
                avatar=user.avatar,
            )
