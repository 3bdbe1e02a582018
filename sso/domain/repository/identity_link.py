"""Identity link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sso.domain.model.identity_link import IdentityLink


class IdentityLinkRepository(ABC):
    """Repository for links between external identities and local users.

    The natural key is (provider, open_id). ``save`` is an upsert on that
    key so two logins racing on the same external identity update one row
    instead of creating two.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: str, open_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and external subject id.

        Args:
            provider: The provider key
            open_id: The external subject id

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, link: IdentityLink) -> IdentityLink:
        """Insert or update a link by its (provider, open_id) key.

        Args:
            link: The link to save

        Returns:
            The stored link. When a row with the same key already existed,
            the returned link carries that row's ID.
        """
        pass
