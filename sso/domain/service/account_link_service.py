"""Account link (bind) domain service."""

import secrets
import zlib

import logfire

from sso.config import SsoSettings
from sso.domain.error import LoginRequiredError
from sso.domain.model.identity_link import IdentityLink
from sso.domain.model.session import SessionContext
from sso.domain.model.user import NAME_MAX_LENGTH, BasicUser
from sso.domain.value import ExternalIdentity, RoleId

from .base import Service
from .role_service import RoleService
from .user_service import UserService

# Generated passwords are never shown to anyone; the account signs in via SSO
_RANDOM_PASSWORD_BYTES = 12  # 16 url-safe characters


def fallback_account_name(provider: str, seed: str) -> str:
    """Short stable account name for identities without a username.

    Args:
        provider: Provider key
        seed: Subject id, or the access token when the provider gave none

    Returns:
        ``<provider>_<CRC32 of seed as 8 uppercase hex digits>``
    """
    checksum = zlib.crc32(seed.encode("utf-8")) & 0xFFFFFFFF
    return f"{provider}_{checksum:08X}"


class AccountLinkService(Service):
    """Decides which local account an identity link binds to."""

    def __init__(
        self,
        user_service: UserService,
        role_service: RoleService,
        sso_settings: SsoSettings,
    ) -> None:
        """Initialize account link service.

        Args:
            user_service: Account provider
            role_service: Role service for new accounts
            sso_settings: Reconciliation policy
        """
        self.user_service = user_service
        self.role_service = role_service
        self.sso_settings = sso_settings

    async def bind(
        self,
        link: IdentityLink,
        identity: ExternalIdentity,
        session: SessionContext,
    ) -> BasicUser:
        """Bind ``link`` to a local account and enable it.

        A user already signed in to the session is always the target.
        Otherwise an account is looked up by candidate name, and registered
        when none exists. The link itself is not saved here.

        Args:
            link: Link being bound (mutated in place)
            identity: External identity from this login
            session: Current session

        Returns:
            The bound user

        Raises:
            LoginRequiredError: No session user and auto-registration is off
        """
        with logfire.span(
            "account_link_service.bind",
            provider=identity.provider,
            open_id=link.open_id,
            signed_in=session.current_user is not None,
        ):
            user = session.current_user
            if user is None:
                if not self.sso_settings.auto_register:
                    logfire.warn(
                        "Bind rejected, auto-registration disabled",
                        provider=identity.provider,
                        open_id=link.open_id,
                    )
                    raise LoginRequiredError(identity.provider)

                user = await self._find_or_register(identity)

            link.user_id = user.id
            link.enable = True

            logfire.info(
                "Identity bound",
                provider=identity.provider,
                open_id=link.open_id,
                user_id=str(user.id),
                name=user.name,
            )
            return user

    async def candidate_name(self, identity: ExternalIdentity) -> tuple[str, BasicUser | None]:
        """Pick the local account name for an identity and look it up.

        Args:
            identity: External identity

        Returns:
            The candidate name and the account already holding it, if any
        """
        name = identity.username
        if name and len(name) <= NAME_MAX_LENGTH:
            user = await self.user_service.find_by_name(name)
            if user is None:
                return name, None

            # An unrelated local account owns the bare name
            name = f"{identity.provider}_{name}"

        if not name or len(name) > NAME_MAX_LENGTH:
            # No username, or one too long for a local account name
            seed = identity.open_id or identity.access_token or ""
            name = fallback_account_name(identity.provider, seed)

        return name, await self.user_service.find_by_name(name)

    async def _find_or_register(self, identity: ExternalIdentity) -> BasicUser:
        name, user = await self.candidate_name(identity)
        if user is not None:
            logfire.info("Reusing account by name", name=name, user_id=str(user.id))
            return user

        default_role = self.sso_settings.default_role
        if default_role > 0:
            role_id = RoleId(default_role)
        else:
            role_id = await self.role_service.resolve_role(
                identity, allow_create=default_role < 0
            )

        return await self.user_service.register(
            name,
            secrets.token_urlsafe(_RANDOM_PASSWORD_BYTES),
            role_id,
            enable=True,
        )
