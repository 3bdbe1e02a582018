"""Integration test for LoginUseCase with real database.

Runs the login reconciliation against PostgreSQL with the OAuth and
avatar collaborators mocked.
"""

from dishka import AsyncContainer
import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from sso.application.usecase.sso.login import LoginRequest, LoginUseCase
from sso.domain.model import SessionContext
from sso.domain.repository import IdentityLinkRepository, UserRepository
from tests.harness import create_env_fixture, make_identity

# Integration test fixture - real PostgreSQL, mocked external services
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env: AsyncContainer):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text("TRUNCATE TABLE identity_links, users, roles RESTART IDENTITY CASCADE")
    )
    await session.flush()
    yield


class TestLoginIntegration:
    """Integration tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_first_and_repeat_login(self, integration_env: AsyncContainer):
        # Arrange
        login_use_case = await integration_env.get(LoginUseCase)
        identity = make_identity(claims={"email": "octo@example.com", "RoleID": "2"})

        # Act
        first = await login_use_case.execute(
            LoginRequest(identity=identity, session=SessionContext(origin="10.0.0.1"))
        )
        second = await login_use_case.execute(
            LoginRequest(identity=identity, session=SessionContext(origin="10.0.0.2"))
        )

        # Assert
        assert first.user_id == second.user_id

        users = await integration_env.get(UserRepository)
        user = await users.find_by_name("octocat")
        assert user.mail == "octo@example.com"
        assert user.role_id == 2
        assert user.logins == 2
        assert user.last_login_ip == "10.0.0.2"

        links = await integration_env.get(IdentityLinkRepository)
        link = await links.find_by_provider("github", "gh-1001")
        assert link.user_id == user.id
        assert link.enable is True
