"""Unit tests for AccountLinkService."""

import re
import zlib
from uuid import uuid4

import pytest

from sso.config import SsoSettings
from sso.domain.error import LoginRequiredError
from sso.domain.model import BasicUser, IdentityLink, SessionContext
from sso.domain.model.user import NAME_MAX_LENGTH
from sso.domain.service import (
    AccountLinkService,
    RoleService,
    UserService,
    fallback_account_name,
)
from sso.domain.value import IdentityLinkId, UserId
from sso.persistence.repository.inmemory import (
    InMemoryRoleRepository,
    InMemoryUserRepository,
)
from tests.harness import make_identity


def _service(
    user_repo: InMemoryUserRepository,
    role_repo: InMemoryRoleRepository | None = None,
    **sso,
) -> AccountLinkService:
    return AccountLinkService(
        user_service=UserService(user_repo),
        role_service=RoleService(role_repo or InMemoryRoleRepository()),
        sso_settings=SsoSettings(**sso),
    )


def _link(provider: str = "github", open_id: str = "gh-1001") -> IdentityLink:
    return IdentityLink(id=IdentityLinkId(uuid4()), provider=provider, open_id=open_id)


class TestFallbackAccountName:
    """Tests for fallback_account_name()."""

    def test_format(self):
        name = fallback_account_name("qq", "ABCDEF0123")
        assert re.fullmatch(r"qq_[0-9A-F]{8}", name)

    def test_is_crc32_of_seed(self):
        expected = f"{zlib.crc32(b'ABCDEF0123'):08X}"
        assert fallback_account_name("qq", "ABCDEF0123") == f"qq_{expected}"

    def test_is_deterministic(self):
        assert fallback_account_name("qq", "x") == fallback_account_name("qq", "x")
        assert fallback_account_name("qq", "x") != fallback_account_name("qq", "y")


class TestCandidateName:
    """Tests for AccountLinkService.candidate_name()."""

    @pytest.mark.asyncio
    async def test_free_username_is_used(self):
        service = _service(InMemoryUserRepository())

        name, user = await service.candidate_name(make_identity(username="octocat"))

        assert name == "octocat"
        assert user is None

    @pytest.mark.asyncio
    async def test_taken_username_is_provider_qualified(self):
        user_repo = InMemoryUserRepository()
        await user_repo.add(BasicUser(id=UserId(uuid4()), name="octocat"))
        service = _service(user_repo)

        name, user = await service.candidate_name(make_identity(username="octocat"))

        assert name == "github_octocat"
        assert user is None

    @pytest.mark.asyncio
    async def test_provider_qualified_name_matches_existing(self):
        user_repo = InMemoryUserRepository()
        await user_repo.add(BasicUser(id=UserId(uuid4()), name="octocat"))
        qualified = BasicUser(id=UserId(uuid4()), name="github_octocat")
        await user_repo.add(qualified)
        service = _service(user_repo)

        name, user = await service.candidate_name(make_identity(username="octocat"))

        assert name == "github_octocat"
        assert user.id == qualified.id

    @pytest.mark.asyncio
    async def test_no_username_uses_checksum_of_open_id(self):
        service = _service(InMemoryUserRepository())
        identity = make_identity(provider="qq", username=None, open_id="OPENID-7")

        name, _ = await service.candidate_name(identity)

        assert name == fallback_account_name("qq", "OPENID-7")

    @pytest.mark.asyncio
    async def test_no_username_or_open_id_uses_access_token(self):
        service = _service(InMemoryUserRepository())
        identity = make_identity(
            provider="qq", username=None, open_id=None, access_token="TOKEN-9"
        )

        name, _ = await service.candidate_name(identity)

        assert name == fallback_account_name("qq", "TOKEN-9")

    @pytest.mark.asyncio
    async def test_overlong_username_uses_checksum(self):
        service = _service(InMemoryUserRepository())
        identity = make_identity(username="o" * (NAME_MAX_LENGTH + 1), open_id="gh-1001")

        name, user = await service.candidate_name(identity)

        assert name == fallback_account_name("github", "gh-1001")
        assert user is None

    @pytest.mark.asyncio
    async def test_qualified_name_too_long_uses_checksum(self):
        long_name = "o" * (NAME_MAX_LENGTH - 2)
        user_repo = InMemoryUserRepository()
        await user_repo.add(BasicUser(id=UserId(uuid4()), name=long_name))
        service = _service(user_repo)

        name, _ = await service.candidate_name(
            make_identity(username=long_name, open_id="gh-1001")
        )

        assert name == fallback_account_name("github", "gh-1001")


class TestBind:
    """Tests for AccountLinkService.bind()."""

    @pytest.mark.asyncio
    async def test_session_user_is_bind_target(self):
        """A signed-in user is reused; no account is created."""
        # Arrange
        user_repo = InMemoryUserRepository()
        current = BasicUser(id=UserId(uuid4()), name="alice")
        await user_repo.add(current)
        service = _service(user_repo)
        link = _link()

        # Act
        user = await service.bind(
            link, make_identity(), SessionContext(current_user=current)
        )

        # Assert
        assert user.id == current.id
        assert link.user_id == current.id
        assert link.enable is True
        assert await user_repo.find_by_name("octocat") is None

    @pytest.mark.asyncio
    async def test_registers_enabled_account(self):
        user_repo = InMemoryUserRepository()
        service = _service(user_repo)
        link = _link()

        user = await service.bind(link, make_identity(), SessionContext())

        assert user.name == "octocat"
        assert user.enable is True
        assert link.user_id == user.id
        assert link.enable is True
        assert (await user_repo.find_by_name("octocat")).id == user.id

    @pytest.mark.asyncio
    async def test_registers_account_for_overlong_taken_username(self):
        long_name = "o" * NAME_MAX_LENGTH
        user_repo = InMemoryUserRepository()
        await user_repo.add(BasicUser(id=UserId(uuid4()), name=long_name))
        service = _service(user_repo)
        link = _link()

        user = await service.bind(
            link, make_identity(username=long_name, open_id="gh-1001"), SessionContext()
        )

        assert user.name == fallback_account_name("github", "gh-1001")
        assert len(user.name) <= NAME_MAX_LENGTH
        assert link.user_id == user.id

    @pytest.mark.asyncio
    async def test_reuses_account_matching_candidate_name(self):
        user_repo = InMemoryUserRepository()
        service = _service(user_repo)
        identity = make_identity(provider="qq", username=None, open_id="OPENID-7")
        existing = BasicUser(
            id=UserId(uuid4()), name=fallback_account_name("qq", "OPENID-7")
        )
        await user_repo.add(existing)

        user = await service.bind(_link("qq", "OPENID-7"), identity, SessionContext())

        assert user.id == existing.id

    @pytest.mark.asyncio
    async def test_auto_register_disabled_requires_login(self):
        user_repo = InMemoryUserRepository()
        service = _service(user_repo, auto_register=False)
        link = _link()

        with pytest.raises(LoginRequiredError):
            await service.bind(link, make_identity(), SessionContext())

        assert link.user_id is None
        assert link.enable is False
        assert await user_repo.find_by_name("octocat") is None

    @pytest.mark.asyncio
    async def test_new_account_gets_fixed_default_role(self):
        service = _service(InMemoryUserRepository(), default_role=5)

        user = await service.bind(
            _link(), make_identity(claims={"RoleID": "3"}), SessionContext()
        )

        assert user.role_id == 5

    @pytest.mark.asyncio
    async def test_new_account_role_from_claims(self):
        service = _service(InMemoryUserRepository(), default_role=0)

        user = await service.bind(
            _link(), make_identity(claims={"RoleID": "3"}), SessionContext()
        )

        assert user.role_id == 3

    @pytest.mark.asyncio
    async def test_new_account_role_created_in_override_mode(self):
        role_repo = InMemoryRoleRepository()
        service = _service(InMemoryUserRepository(), role_repo, default_role=-1)

        user = await service.bind(
            _link(), make_identity(claims={"RoleName": "auditors"}), SessionContext()
        )

        role = await role_repo.find_by_name("auditors")
        assert role is not None
        assert user.role_id == role.id
