"""In-memory identity link repository for testing."""

from typing import Optional

from sso.domain.model.identity_link import IdentityLink
from sso.domain.repository.identity_link import IdentityLinkRepository


class InMemoryIdentityLinkRepository(IdentityLinkRepository):
    """In-memory implementation of IdentityLinkRepository for testing."""

    def __init__(self) -> None:
        self._links: dict[tuple[str, str], IdentityLink] = {}

    async def find_by_provider(
        self, provider: str, open_id: str
    ) -> Optional[IdentityLink]:
        """Find link by provider and external subject id."""
        link = self._links.get((provider, open_id))
        return link.model_copy(deep=True) if link else None

    async def save(self, link: IdentityLink) -> IdentityLink:
        """Upsert by (provider, open_id), keeping the stored row's ID."""
        key = (link.provider, link.open_id)
        stored = link.model_copy(deep=True)

        existing = self._links.get(key)
        if existing:
            stored.id = existing.id
            stored.created_at = existing.created_at

        self._links[key] = stored
        return stored.model_copy(deep=True)

    def count(self) -> int:
        """Number of stored links."""
        return len(self._links)
