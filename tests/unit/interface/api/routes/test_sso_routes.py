"""Tests for the SSO HTTP routes, run against the mock container."""

from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from sso.config import SessionSettings
from sso.domain.model import ExtendedUser
from sso.domain.repository import IdentityLinkRepository, UserRepository
from sso.domain.service import JWTService
from sso.domain.value import UserId
from sso.interface.api.app import create_app
from sso.interface.api.routes.sso import _action_from_state, _state_for
from tests.di import (
    MOCK_CLIENT_ID,
    MOCK_CLIENT_SECRET,
    MOCK_PROVIDER,
    MOCK_REDIRECT_URI,
    build_test_container,
)

MOCK_OPEN_ID = "mock-openid-123"


@pytest_asyncio.fixture
async def api():
    """HTTP client and container for a fresh app with mocked infrastructure."""
    container = build_test_container()
    app = create_app(container)
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client, container

    await container.close()


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


def _authorize_params(**overrides) -> dict[str, str]:
    params = {"client_id": MOCK_CLIENT_ID, "redirect_uri": MOCK_REDIRECT_URI}
    params.update(overrides)
    return params


def _exchange_params(code: str, **overrides) -> dict[str, str]:
    params = {
        "code": code,
        "client_id": MOCK_CLIENT_ID,
        "client_secret": MOCK_CLIENT_SECRET,
    }
    params.update(overrides)
    return params


async def _login(client: httpx.AsyncClient, action: str | None = None) -> httpx.Response:
    params = {"sso_action": action} if action else {}
    redirect = await client.get(f"/sso/login/{MOCK_PROVIDER}", params=params)
    state = _query(redirect.headers["location"])["state"][0]
    return await client.get(
        f"/sso/callback/{MOCK_PROVIDER}", params={"code": "code-1", "state": state}
    )


class TestOAuthState:
    """Tests for the OAuth state helpers."""

    def test_action_survives_round_trip(self):
        assert _action_from_state(_state_for("bind")) == "bind"

    def test_no_action(self):
        assert _action_from_state(_state_for(None)) is None

    def test_foreign_state(self):
        assert _action_from_state("opaque-value") is None

    def test_states_are_unique(self):
        assert _state_for("bind") != _state_for("bind")


class TestHealth:
    """Tests for the health endpoint."""

    @pytest.mark.asyncio
    async def test_health_lists_providers(self, api):
        client, _ = api

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["providers"] == [MOCK_PROVIDER]


class TestLoginRoutes:
    """Tests for the client-side login flow."""

    @pytest.mark.asyncio
    async def test_login_redirects_to_provider(self, api):
        client, _ = api

        response = await client.get(f"/sso/login/{MOCK_PROVIDER}")

        assert response.status_code == 302
        assert response.headers["location"].startswith("https://auth.example.com/authorize")
        assert "sso_state" in response.cookies

    @pytest.mark.asyncio
    async def test_unknown_provider_is_404(self, api):
        client, _ = api

        response = await client.get("/sso/login/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundError"

    @pytest.mark.asyncio
    async def test_callback_signs_in_and_links(self, api):
        # Arrange
        client, container = api

        # Act
        response = await _login(client)

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/admin"
        assert "sso_session" in response.cookies

        users = await container.get(UserRepository)
        user = await users.find_by_name("mockuser")
        assert user.enable is True
        assert user.mail == "mock@example.com"
        assert user.logins == 1

        links = await container.get(IdentityLinkRepository)
        link = await links.find_by_provider(MOCK_PROVIDER, MOCK_OPEN_ID)
        assert link.user_id == user.id

    @pytest.mark.asyncio
    async def test_callback_rejects_state_mismatch(self, api):
        client, container = api
        await client.get(f"/sso/login/{MOCK_PROVIDER}")

        response = await client.get(
            f"/sso/callback/{MOCK_PROVIDER}", params={"code": "c", "state": "forged"}
        )

        assert response.status_code == 400
        users = await container.get(UserRepository)
        assert users.count() == 0

    @pytest.mark.asyncio
    async def test_disabled_account_is_rejected_but_recorded(self, api):
        client, container = api
        await _login(client)
        users = await container.get(UserRepository)
        user = await users.find_by_name("mockuser")
        user.enable = False
        await users.save(user)
        client.cookies.clear()

        response = await _login(client)

        assert response.status_code == 403
        assert response.json()["error"] == "AccountDisabledError"
        assert "sso_session" not in response.cookies
        assert (await users.find_by_id(user.id)).logins == 2

    @pytest.mark.asyncio
    async def test_bind_action_links_signed_in_user(self, api):
        client, container = api
        users = await container.get(UserRepository)
        alice = ExtendedUser(id=UserId(uuid4()), name="alice")
        await users.add(alice)
        token = JWTService(SessionSettings()).create_token(str(alice.id), alice.name)
        client.cookies.set("sso_session", token)

        response = await _login(client, action="bind")

        assert response.status_code == 302
        links = await container.get(IdentityLinkRepository)
        link = await links.find_by_provider(MOCK_PROVIDER, MOCK_OPEN_ID)
        assert link.user_id == alice.id
        assert await users.find_by_name("mockuser") is None

    @pytest.mark.asyncio
    async def test_login_required_redirects_to_login_page(self, api, monkeypatch):
        monkeypatch.setenv("SSO__AUTO_REGISTER", "false")
        client, container = api

        response = await _login(client)

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/user/login"
        users = await container.get(UserRepository)
        assert users.count() == 0

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, api):
        client, _ = api
        await _login(client)

        response = await client.get("/sso/logout")

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/user/login"
        assert "sso_session" not in client.cookies


class TestIdentityProviderRoutes:
    """Tests for the routes downstream applications call."""

    @pytest.mark.asyncio
    async def test_authorize_requires_sign_in(self, api):
        client, _ = api

        response = await client.get("/sso/authorize", params=_authorize_params())

        assert response.status_code == 302
        assert response.headers["location"] == "/admin/user/login"

    @pytest.mark.asyncio
    async def test_full_code_flow(self, api):
        client, _ = api
        await _login(client)

        authorize = await client.get("/sso/authorize", params=_authorize_params(state="s1"))
        query = _query(authorize.headers["location"])
        assert query["state"] == ["s1"]

        token = await client.post(
            "/sso/access_token",
            params=_exchange_params(query["code"][0], redirect_uri=MOCK_REDIRECT_URI),
        )
        assert token.status_code == 200
        body = token.json()
        assert body["scope"] == "basic,UserInfo"
        assert body["expires_in"] == 7200

        info = await client.get(
            "/sso/userinfo",
            headers={"Authorization": f"Bearer {body['access_token']}"},
        )
        assert info.status_code == 200
        assert info.json()["username"] == "mockuser"
        assert info.json()["nickname"] == "Mock User"
        assert info.json()["mail"] == "mock@example.com"
        assert info.json()["avatar"] == "https://example.com/avatar.jpg"

        by_query = await client.get(
            "/sso/userinfo", params={"access_token": body["access_token"]}
        )
        assert by_query.json() == info.json()

    @pytest.mark.asyncio
    async def test_code_reuse_is_401(self, api):
        client, _ = api
        await _login(client)
        authorize = await client.get("/sso/authorize", params=_authorize_params())
        code = _query(authorize.headers["location"])["code"][0]

        first = await client.get("/sso/access_token", params=_exchange_params(code))
        second = await client.get("/sso/access_token", params=_exchange_params(code))

        assert first.status_code == 200
        assert second.status_code == 401
        assert second.json()["error"] == "TokenError"

    @pytest.mark.asyncio
    async def test_unregistered_redirect_uri_is_400_without_redirect(self, api):
        client, _ = api
        await _login(client)

        response = await client.get(
            "/sso/authorize",
            params=_authorize_params(redirect_uri="https://evil.example/steal"),
        )

        assert response.status_code == 400
        assert "location" not in response.headers
        assert response.json()["error"] == "ClientError"

    @pytest.mark.asyncio
    async def test_unknown_client_is_400_before_sign_in(self, api):
        client, _ = api

        response = await client.get(
            "/sso/authorize", params=_authorize_params(client_id="stranger")
        )

        assert response.status_code == 400
        assert "location" not in response.headers

    @pytest.mark.asyncio
    async def test_exchange_with_wrong_secret_is_401(self, api):
        client, _ = api
        await _login(client)
        authorize = await client.get("/sso/authorize", params=_authorize_params())
        code = _query(authorize.headers["location"])["code"][0]

        response = await client.get(
            "/sso/access_token", params=_exchange_params(code, client_secret="guess")
        )

        assert response.status_code == 401
        assert response.json()["error"] == "TokenError"

    @pytest.mark.asyncio
    async def test_exchange_without_client_credentials_is_rejected(self, api):
        client, _ = api
        await _login(client)
        authorize = await client.get("/sso/authorize", params=_authorize_params())
        code = _query(authorize.headers["location"])["code"][0]

        response = await client.get("/sso/access_token", params={"code": code})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_userinfo_without_token_is_401(self, api):
        client, _ = api

        response = await client.get("/sso/userinfo")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_avatar_not_cached_is_404(self, api):
        client, _ = api

        response = await client.get(f"/sso/avatar/{uuid4()}")

        assert response.status_code == 404
