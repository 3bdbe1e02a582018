"""Profile merge domain service."""

import logfire

from sso.config import SsoSettings
from sso.domain.model.user import BasicUser, ExtendedProfile
from sso.domain.value import ExternalIdentity, RoleId, Sex, is_remote_url

from .avatar_service import AvatarService
from .base import Service
from .role_service import RoleService


class ProfileService(Service):
    """Applies external identity claims onto a local user.

    Fields are only filled when empty locally, so repeated logins never
    clobber data an administrator or the user edited. Role is the
    exception and follows ``SsoSettings.default_role``.
    """

    def __init__(
        self,
        role_service: RoleService,
        avatar_service: AvatarService,
        sso_settings: SsoSettings,
    ) -> None:
        """Initialize profile service.

        Args:
            role_service: Role service for claim-driven roles
            avatar_service: Avatar cache
            sso_settings: Reconciliation policy
        """
        self.role_service = role_service
        self.avatar_service = avatar_service
        self.sso_settings = sso_settings

    async def merge(self, identity: ExternalIdentity, user: BasicUser) -> None:
        """Merge identity claims into ``user`` in place.

        Users without the extended profile capability only get their
        display name filled.

        Args:
            identity: External identity from this login
            user: Local user to update
        """
        with logfire.span(
            "profile_service.merge",
            provider=identity.provider,
            user_id=str(user.id),
        ):
            if not user.display_name and identity.nickname:
                user.display_name = identity.nickname

            if not isinstance(user, ExtendedProfile):
                logfire.debug("User has no extended profile", user_id=str(user.id))
                return

            if not user.mail:
                user.mail = identity.claim("email", "mail")
            if not user.mobile:
                user.mobile = identity.claim("mobile")
            if not user.code:
                user.code = identity.claim("code")
            if user.sex == Sex.UNKNOWN:
                sex = identity.claim("sex")
                if sex:
                    user.sex = Sex.parse(sex)

            await self._merge_role(identity, user)

            if not user.avatar:
                user.avatar = identity.avatar

            if is_remote_url(user.avatar) and self.avatar_service.enabled:
                await self.avatar_service.fetch_avatar(user)

            logfire.info(
                "Profile merged",
                user_id=str(user.id),
                role_id=user.role_id,
                has_mail=bool(user.mail),
                has_avatar=bool(user.avatar),
            )

    async def _merge_role(self, identity: ExternalIdentity, user: ExtendedProfile) -> None:
        default_role = self.sso_settings.default_role

        if default_role > 0:
            user.role_id = RoleId(default_role)
            return

        if default_role == 0 and user.role_id > 0:
            return

        user.role_id = await self.role_service.resolve_role(
            identity, allow_create=default_role < 0
        )
