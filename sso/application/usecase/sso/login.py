"""Login use case."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import BaseModel

from sso.config import SsoSettings
from sso.domain.error import AccountDisabledError, MalformedInputError
from sso.domain.model import IdentityLink, LoginAudit, SessionContext
from sso.domain.model.user import BasicUser
from sso.domain.service import (
    AccountLinkService,
    IdentityLinkService,
    ProfileService,
    UserService,
)
from sso.domain.value import ExternalIdentity, IdentityLinkId


@dataclass
class LoginRequest:
    """Login request after the OAuth collaborator verified the provider.

    ``session`` is mutated: a successful login sets ``current_user``.
    """

    identity: ExternalIdentity
    session: SessionContext


class LoginResponse(BaseModel):
    """Login response."""

    redirect_url: str
    user_id: str
    name: str


class LoginUseCase:
    """Use case reconciling an external identity with a local account."""

    def __init__(
        self,
        identity_link_service: IdentityLinkService,
        account_link_service: AccountLinkService,
        profile_service: ProfileService,
        user_service: UserService,
        sso_settings: SsoSettings,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_link_service: Identity link domain service
            account_link_service: Bind decision domain service
            profile_service: Profile merge domain service
            user_service: User domain service
            sso_settings: Reconciliation policy
        """
        self.identity_link_service = identity_link_service
        self.account_link_service = account_link_service
        self.profile_service = profile_service
        self.user_service = user_service
        self.sso_settings = sso_settings

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login reconciliation.

        Steps:
        1. Find the identity link by (provider, subject id), or start a new one
        2. Refresh the link snapshot from the identity
        3. Bind when forced, unbound, dangling or disabled; else reuse the linked user
        4. Merge profile claims into the user
        5. Record login counters and save the user (when it keeps counters)
        6. Save the link
        7. Reject disabled accounts, then activate the session

        Args:
            request: Verified identity and the caller's session

        Returns:
            Post-login redirect target

        Raises:
            MalformedInputError: If the identity has neither open id nor username
            LoginRequiredError: If binding needs a signed-in account
            AccountDisabledError: If the resolved account is disabled. The
                link and user writes from steps 5 and 6 are kept.
        """
        identity = request.identity
        session = request.session

        subject_id = identity.subject_id
        if not subject_id:
            raise MalformedInputError(
                f"{identity.provider} identity has neither open id nor username"
            )

        with logfire.span(
            "login_user",
            provider=identity.provider,
            open_id=subject_id,
            force_bind=session.force_bind,
        ):
            link = await self.identity_link_service.get_link(
                identity.provider, subject_id
            )
            if link is None:
                link = IdentityLink(
                    id=IdentityLinkId(uuid4()),
                    provider=identity.provider,
                    open_id=subject_id,
                )
            link.fill(identity)

            user = await self._linked_user(link)
            if session.force_bind or user is None or not link.enable:
                user = await self.account_link_service.bind(link, identity, session)

            await self.profile_service.merge(identity, user)

            if isinstance(user, LoginAudit):
                user.logins += 1
                user.last_login = datetime.now(timezone.utc)
                user.last_login_ip = session.origin
                user = await self.user_service.save(user)

            await self.identity_link_service.save(link)

            if not user.enable:
                logfire.warn(
                    "Login rejected, account disabled",
                    user_id=str(user.id),
                    provider=identity.provider,
                )
                raise AccountDisabledError(user.name)

            session.current_user = user

            logfire.info(
                "User logged in",
                user_id=str(user.id),
                name=user.name,
                provider=identity.provider,
            )

            return LoginResponse(
                redirect_url=self.sso_settings.success_url,
                user_id=str(user.id),
                name=user.name,
            )

    async def _linked_user(self, link: IdentityLink) -> BasicUser | None:
        if link.user_id is None:
            return None
        return await self.user_service.find_by_id(link.user_id)
