"""Unit tests for IdentityLinkService."""

from uuid import uuid4

import pytest

from sso.domain.model import IdentityLink
from sso.domain.service import IdentityLinkService
from sso.domain.value import IdentityLinkId
from sso.persistence.repository.inmemory import InMemoryIdentityLinkRepository
from tests.harness import make_identity


class TestIdentityLinkService:
    """Tests for IdentityLinkService."""

    @pytest.mark.asyncio
    async def test_get_link_missing(self):
        service = IdentityLinkService(InMemoryIdentityLinkRepository())

        assert await service.get_link("github", "gh-1001") is None

    @pytest.mark.asyncio
    async def test_save_then_get_link_keeps_snapshot(self):
        # Arrange
        service = IdentityLinkService(InMemoryIdentityLinkRepository())
        link = IdentityLink(id=IdentityLinkId(uuid4()), provider="github", open_id="gh-1001")
        link.fill(make_identity(expires_in=3600, claims={"email": "o@example.com"}))

        # Act
        await service.save(link)
        stored = await service.get_link("github", "gh-1001")

        # Assert
        assert stored.username == "octocat"
        assert stored.access_token == "gho_token"
        assert stored.expires_at is not None
        assert stored.claims == {"email": "o@example.com"}
        assert stored.enable is False
