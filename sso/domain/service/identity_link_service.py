"""Identity link domain service."""

import logfire

from sso.domain.model.identity_link import IdentityLink
from sso.domain.repository import IdentityLinkRepository

from .base import Service


class IdentityLinkService(Service):
    """Domain service for identity link operations."""

    def __init__(self, identity_link_repository: IdentityLinkRepository) -> None:
        """Initialize identity link service.

        Args:
            identity_link_repository: Identity link repository
        """
        self.identity_link_repository = identity_link_repository

    async def get_link(self, provider: str, open_id: str) -> IdentityLink | None:
        """Get link by provider and external subject id.

        Args:
            provider: Provider key
            open_id: External subject id

        Returns:
            Link if found, None otherwise
        """
        with logfire.span(
            "identity_link_service.get_link", provider=provider, open_id=open_id
        ):
            link = await self.identity_link_repository.find_by_provider(
                provider, open_id
            )
            if link:
                logfire.info(
                    "Identity link found",
                    provider=provider,
                    open_id=open_id,
                    user_id=str(link.user_id),
                    enable=link.enable,
                )
            else:
                logfire.info("Identity link not found", provider=provider, open_id=open_id)
            return link

    async def save(self, link: IdentityLink) -> IdentityLink:
        """Save link (create or update by provider and open id).

        Args:
            link: Link to save

        Returns:
            Saved link
        """
        with logfire.span(
            "identity_link_service.save",
            provider=link.provider,
            open_id=link.open_id,
            user_id=str(link.user_id),
        ):
            saved = await self.identity_link_repository.save(link)
            logfire.info(
                "Identity link saved",
                link_id=str(saved.id),
                provider=saved.provider,
                user_id=str(saved.user_id),
            )
            return saved
